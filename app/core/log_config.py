import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


#Configure root logging once per process (serverless cold start)
def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
