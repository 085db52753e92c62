"""Thin clients and helpers for the external APIs."""
