import logging
from pathlib import Path
from starlette.responses import FileResponse
from starlette.types import Receive, Scope, Send
from app.services.export_service import ExportFile


logger = logging.getLogger("app.exports")


class TransientFileResponse(FileResponse):
    """FileResponse that deletes its file once sending ends, successfully or not."""

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        try:
            await super().__call__(scope, receive, send)
        finally:
            Path(self.path).unlink(missing_ok=True)
            logger.debug("Removed transient export %s", self.path)


def attachment(export: ExportFile) -> TransientFileResponse:
    return TransientFileResponse(export.path, media_type=export.media_type, filename=export.filename)
