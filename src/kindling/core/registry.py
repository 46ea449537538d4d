# ABOUTME: Processor registry mapping a file extension to the format processor that handles it.
# ABOUTME: Resolution is first match in registration order; overlapping claims are logged.

import logging
from collections.abc import Iterator

from kindling.formats import FormatProcessor, default_processors, normalize_extension

logger = logging.getLogger(__name__)


class ProcessorRegistry:
    """Ordered pool of format processors, selected by their capability predicate.

    When two processors claim the same extension the one registered first
    stays canonical. The later registration is kept (it may claim other
    extensions) and a warning names both.
    """

    def __init__(self, processors: list[FormatProcessor] | None = None) -> None:
        self._processors: list[FormatProcessor] = []
        for processor in processors or []:
            self.register(processor)

    def register(self, processor: FormatProcessor) -> None:
        """Add a processor to the end of the resolution order."""
        if any(existing is processor for existing in self._processors):
            return

        for extension in sorted(processor.extensions):
            owner = self.resolve(extension)
            if owner is not None:
                logger.warning(
                    "Processor %r also claims .%s; %r was registered first and stays canonical",
                    processor.name,
                    extension,
                    owner.name,
                )

        self._processors.append(processor)
        logger.debug(
            "Registered processor %r for %s",
            processor.name,
            ", ".join(sorted(processor.extensions)),
        )

    def resolve(self, extension: str) -> FormatProcessor | None:
        """Return the first processor that supports ``extension``, or None."""
        normalized = normalize_extension(extension)
        if not normalized:
            return None
        for processor in self._processors:
            if processor.supports(normalized):
                return processor
        return None

    def supported_extensions(self) -> list[str]:
        """Every claimed extension, in resolution order, without duplicates."""
        seen: list[str] = []
        for processor in self._processors:
            for extension in sorted(processor.extensions):
                if extension not in seen:
                    seen.append(extension)
        return seen

    @property
    def processors(self) -> tuple[FormatProcessor, ...]:
        return tuple(self._processors)

    def __iter__(self) -> Iterator[FormatProcessor]:
        return iter(tuple(self._processors))

    def __len__(self) -> int:
        return len(self._processors)


def build_default_registry() -> ProcessorRegistry:
    """A registry holding every processor Kindling ships with."""
    return ProcessorRegistry(default_processors())
