from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor

from imagepipe.logging.logger import Log
from imagepipe.processor.models import ProcessedResult, RawImage


class BatchRunner:
    """Run one image callable per batch entry on a bounded thread pool.

    Results keep the input order. The batch is atomic: the first failure cancels
    images that have not started yet and is re-raised unchanged.
    """

    def __init__(self, max_workers: int = 4) -> None:
        if max_workers <= 0:
            raise ValueError(f"max_workers must be positive, got {max_workers}")
        self._max_workers = max_workers

    def run(
        self,
        images: Sequence[RawImage],
        process: Callable[[RawImage], ProcessedResult],
    ) -> list[ProcessedResult]:
        if self._max_workers == 1 or len(images) <= 1:
            return [process(image) for image in images]

        workers = min(self._max_workers, len(images))
        executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="imagepipe")
        futures: list[Future[ProcessedResult]] = [
            executor.submit(process, image) for image in images
        ]
        try:
            results = [future.result() for future in futures]
        except Exception:
            cancelled = sum(future.cancel() for future in futures)
            Log.warning(f"Batch aborted, {cancelled} pending image(s) cancelled")
            executor.shutdown(wait=True, cancel_futures=True)
            raise
        executor.shutdown(wait=True)
        return results
