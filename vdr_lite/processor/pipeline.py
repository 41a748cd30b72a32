from abc import ABC, abstractmethod

from vdr_lite.processor.models import ProcessedFile


class PipelineStep(ABC):
    @abstractmethod
    async def run(self, context: ProcessedFile) -> ProcessedFile:
        raise NotImplementedError
