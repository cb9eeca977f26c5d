"""FastAPI server for the Magic 8 Ball API."""

import logging
import time
import uuid
from typing import List
from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from eightball.answer_source import AnswerSource
from eightball.responder import QuestionResponder
from models.schemas import MagicEightBallRequest, ResponseRecord, SystemConfig
from workers.batch_dispatcher import BatchDispatcher
from utils.logging_config import RequestLog, configure_logging, set_request_id


logger = logging.getLogger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application.

    Builds the answering components once and hangs them off app.state.
    """
    try:
        # Load configuration from environment
        system_config = SystemConfig.from_env()

        # Configure structured logging
        configure_logging(system_config.logLevel)

        logger.info("Starting Magic 8 Ball API...")
        logger.info(f"Configuration loaded: port={system_config.apiPort}, "
                    f"workers={system_config.maxConcurrentWorkers}, "
                    f"timeout_ms={system_config.questionTimeoutMs}")

        # Initialize answering components
        answer_source = AnswerSource()
        responder = QuestionResponder(answer_source)

        # Hang components off app state for the handlers
        app.state.system_config = system_config
        app.state.answer_source = answer_source
        app.state.responder = responder
        app.state.dispatcher = BatchDispatcher(
            responder=responder,
            max_concurrent_workers=system_config.maxConcurrentWorkers,
            question_timeout_ms=system_config.questionTimeoutMs
        )
        app.state.request_log = RequestLog()

        logger.info("Magic 8 Ball API started successfully")

    except Exception as e:
        logger.error(f"Failed to start API: {e}", exc_info=True)
        raise

    yield

    # Shutdown
    logger.info("Shutting down Magic 8 Ball API...")


app = FastAPI(
    title="Magic 8 Ball API",
    description="Ask the Magic 8 Ball one question or many",
    version=VERSION,
    lifespan=lifespan
)


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """
    Middleware to add request ID for tracing.
    """
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    # Set request ID in logging context
    set_request_id(request_id)

    # Log incoming request
    logger.info(f"{request.method} {request.url.path}")

    response = await call_next(request)

    # Add request ID to response headers
    response.headers["X-Request-ID"] = request_id

    # Log response
    logger.info(f"{request.method} {request.url.path} - Status: {response.status_code}")

    return response


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler for unhandled errors.
    """
    request_id = getattr(request.state, "request_id", "unknown")
    set_request_id(request_id)
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "details": "An unexpected error occurred while processing your request",
            "request_id": request_id
        }
    )


@app.post("/magic8ball/ask", response_model=List[ResponseRecord])
async def ask_many(body: MagicEightBallRequest, request: Request) -> List[ResponseRecord]:
    """
    Ask the Magic 8 Ball a batch of questions.

    Args:
        body: Request body holding the questions in submission order
        request: FastAPI request object (for app state)

    Returns:
        One record per question, sorted by ascending response time
    """
    request_log: RequestLog = request.app.state.request_log
    dispatcher: BatchDispatcher = request.app.state.dispatcher

    # Log the request to the request log
    request_log.divider()
    request_log.received(
        f"Request received via HTTP POST URL: /magic8ball/ask with {len(body.questions)} questions"
    )
    start_time = time.perf_counter()

    # Answer all questions concurrently, fastest first
    records = await dispatcher.dispatch(body.questions)

    # Log the end of request processing
    request_log.completed(int((time.perf_counter() - start_time) * 1000))
    return records


@app.get("/magic8ball/ask", response_model=ResponseRecord)
async def ask_one(request: Request, question: str = Query(...)) -> ResponseRecord:
    """
    Ask the Magic 8 Ball a single question.

    Answered inline; the record is always question number 1.
    """
    request_log: RequestLog = request.app.state.request_log
    responder: QuestionResponder = request.app.state.responder

    # Log the request to the request log
    request_log.received(
        f"Request received via HTTP GET URL: /magic8ball/ask and question: {question}"
    )
    start_time = time.perf_counter()

    # Answer inline, no fan-out
    record = responder.answer(1, question)

    # Log the end of request processing
    request_log.completed(int((time.perf_counter() - start_time) * 1000))
    return record


@app.get("/health")
async def health_check(request: Request):
    """
    Health check endpoint.

    Returns:
        Status information about the service
    """
    answer_source = getattr(request.app.state, "answer_source", None)
    is_ready = answer_source is not None and getattr(request.app.state, "dispatcher", None) is not None

    return {
        "status": "healthy" if is_ready else "starting",
        "ready": is_ready,
        "version": VERSION,
        "answers": len(answer_source.answers) if answer_source is not None else 0
    }
