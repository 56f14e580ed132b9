import os

import uvicorn  # type: ignore

from app.utils import get_logger

log = get_logger(__name__)

if __name__ == "__main__":
    port = int(os.environ.get("PORT", "3333"))
    log.info("Running server on port %s", port)
    uvicorn.run("app.main:app", reload=True, host="127.0.0.1", port=port)
