import uvicorn
from fastapi import FastAPI

from briefdesk.api.routes import router
from briefdesk.config.settings import settings
from briefdesk.logging_config import configure_logging

configure_logging(settings.log_level)

app = FastAPI(title="briefdesk")
app.include_router(router)


def run() -> None:
    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
