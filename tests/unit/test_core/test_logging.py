"""Unit tests for logging configuration."""

from loguru import logger

from storyblok_translate_slugs.core.logging import setup_logging


class TestLogging:
    """Tests for Loguru logging setup."""

    def test_setup_logging_does_not_raise(self) -> None:
        setup_logging("DEBUG")
        setup_logging("INFO")
        setup_logging("WARNING")

    def test_setup_logging_case_insensitive(self) -> None:
        setup_logging("info")
        setup_logging("debug")

    def test_setup_logging_with_log_dir(self, tmp_path) -> None:  # type: ignore[no-untyped-def]
        log_dir = tmp_path / "logs"
        setup_logging("INFO", log_dir=str(log_dir))
        logger.info("hello file sink")
        logger.complete()
        assert (log_dir / "storyblok-translate-slugs.log").exists()
        setup_logging("INFO")

    def test_verbose_enables_debug(self, tmp_path) -> None:  # type: ignore[no-untyped-def]
        log_dir = tmp_path / "logs"
        setup_logging("WARNING", log_dir=str(log_dir), verbose=True)
        logger.debug("debug line")
        logger.complete()
        assert "debug line" in (log_dir / "storyblok-translate-slugs.log").read_text()
        setup_logging("INFO")
