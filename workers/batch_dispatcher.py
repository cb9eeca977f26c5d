"""Batch dispatcher that fans questions out to concurrent workers."""

import asyncio
import logging
import time
from typing import List, Optional, Sequence
from eightball.responder import QuestionResponder, ANSWER_SOURCE_ERROR_MESSAGE
from models.schemas import ResponseRecord, ResponseStatus


logger = logging.getLogger(__name__)


TIMEOUT_ERROR_MESSAGE = "Timed out waiting for answer source"


class BatchDispatcher:
    """Answers a list of questions concurrently and returns them fastest first."""

    def __init__(
        self,
        responder: QuestionResponder,
        max_concurrent_workers: Optional[int] = None,
        question_timeout_ms: Optional[int] = None
    ):
        """
        Initialize the batch dispatcher.

        Args:
            responder: The question responder each worker invokes
            max_concurrent_workers: Cap on questions answered at once
                                    (None runs every question at once)
            question_timeout_ms: Per-question timeout (None waits indefinitely)
        """
        self.responder = responder
        self.max_concurrent_workers = max_concurrent_workers
        self.question_timeout_ms = question_timeout_ms
        self.semaphore = asyncio.Semaphore(max_concurrent_workers) if max_concurrent_workers else None
        logger.info(
            f"BatchDispatcher initialized with max_concurrent_workers={max_concurrent_workers}, "
            f"question_timeout_ms={question_timeout_ms}"
        )

    async def dispatch(self, questions: Sequence[str]) -> List[ResponseRecord]:
        """
        Answer every question concurrently and wait for all of them.

        Questions are numbered by input position before any work starts.
        No partial results: the call returns only once every worker is done.

        Args:
            questions: Questions in submission order

        Returns:
            One ResponseRecord per question, sorted by ascending elapsed time
            (ties broken by question number)
        """
        logger.info(f"Dispatching {len(questions)} questions")

        # Create one task per question, numbered by input position
        tasks = [
            self._answer_one(question_number, question)
            for question_number, question in enumerate(questions, start=1)
        ]

        # Execute all tasks concurrently and wait for every one of them
        results = await asyncio.gather(*tasks, return_exceptions=True)

        # Convert any exceptions to error records
        records = []
        for question_number, (question, result) in enumerate(zip(questions, results), start=1):
            if isinstance(result, BaseException):
                logger.error(
                    f"Question {question_number} failed with exception: {result!r}",
                    extra={'question_number': question_number}
                )
                records.append(
                    ResponseRecord(
                        questionNumber=question_number,
                        question=question,
                        elapsedMillis=0,
                        status=ResponseStatus.INTERNAL_ERROR,
                        message=ANSWER_SOURCE_ERROR_MESSAGE
                    )
                )
            else:
                records.append(result)

        # Fastest answers first
        records.sort(key=lambda record: (record.elapsedMillis, record.questionNumber))

        logger.info(f"Completed dispatch of {len(records)} questions")
        return records

    async def _answer_one(self, question_number: int, question: str) -> ResponseRecord:
        """
        Run the responder for one question on the default thread pool.

        A worker slot is held until the responder thread finishes, even when
        the question has already been reported as timed out. A timeout is
        reported as an internal error record instead of holding up the rest
        of the batch.
        """
        if self.semaphore is not None:
            await self.semaphore.acquire()

        start_time = time.perf_counter()
        loop = asyncio.get_running_loop()

        # Run the synchronous responder in a thread pool to avoid blocking
        try:
            work = loop.run_in_executor(None, self.responder.answer, question_number, question)
        except BaseException:
            self._release_slot()
            raise
        work.add_done_callback(self._on_work_done)

        if self.question_timeout_ms is None:
            return await work

        try:
            # Shield the executor future so a timeout leaves it to finish and free its slot
            return await asyncio.wait_for(asyncio.shield(work), timeout=self.question_timeout_ms / 1000)
        except asyncio.TimeoutError:
            elapsed_ms = int((time.perf_counter() - start_time) * 1000)
            logger.warning(
                f"Question {question_number} timed out after {elapsed_ms}ms",
                extra={'question_number': question_number}
            )
            return ResponseRecord(
                questionNumber=question_number,
                question=question,
                elapsedMillis=elapsed_ms,
                status=ResponseStatus.INTERNAL_ERROR,
                message=TIMEOUT_ERROR_MESSAGE
            )

    def _on_work_done(self, work: asyncio.Future) -> None:
        # Mark a late failure as retrieved; the caller may have stopped waiting
        if not work.cancelled():
            work.exception()
        self._release_slot()

    def _release_slot(self) -> None:
        if self.semaphore is not None:
            self.semaphore.release()
