import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import config
from extraction import TaskExtractor
from models import ExtractionResult, ParseRequest, TranscriptRequest

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Smart Task Parser")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

extractor = TaskExtractor()


@app.exception_handler(RequestValidationError)
async def validation_error(_request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("Rejected request body: %s", exc.errors())
    return JSONResponse(status_code=400, content={"success": False, "error": "Invalid request body"})


def _envelope(result: ExtractionResult) -> JSONResponse:
    status_code = 200 if result.success else 500
    return JSONResponse(status_code=status_code, content=result.model_dump(mode="json", by_alias=True))


def _missing(field: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"success": False, "error": f"{field} is required"})


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.post("/parse")
async def parse(request: ParseRequest) -> JSONResponse:
    """Extract a single task from one sentence."""
    if not request.taskText or not request.taskText.strip():
        return _missing("Task text")

    result = await extractor.parse_task(request.taskText)
    if not result.success:
        logger.error("Task parsing failed: %s", result.error)
    return _envelope(result)


@app.post("/parse-transcript")
async def parse_transcript(request: TranscriptRequest) -> JSONResponse:
    """Extract every task mentioned in a meeting transcript."""
    if not request.transcript or not request.transcript.strip():
        return _missing("Transcript text")

    result = await extractor.parse_transcript(request.transcript)
    if not result.success:
        logger.error("Transcript parsing failed: %s", result.error)
    return _envelope(result)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
