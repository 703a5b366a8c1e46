from dotenv import load_dotenv
load_dotenv()

from mangum import Mangum

from app.core.config import get_settings
from app.core.log_config import configure_logging
from app.main import create_app


configure_logging(get_settings().LOG_LEVEL)

#ASGI app for uvicorn (uvicorn app.handler:app)
app = create_app()

#AWS Lambda entrypoint
handler = Mangum(app, lifespan="off")
