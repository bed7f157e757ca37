import logging


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once; later calls keep existing handlers."""
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level)
        return
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
