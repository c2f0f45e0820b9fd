"""Generation log for slice2ts

Records what a generation run did (files written, namespaces aliased,
declarations skipped) and renders a summary for verbose output.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional


class EventKind(Enum):
    """Kinds of generation events"""
    FILE_WRITTEN = "file_written"
    NAMESPACE_ALIASED = "namespace_aliased"
    TYPE_IGNORED = "type_ignored"


@dataclass
class GenerationEvent:
    """Record of a single generation event"""
    kind: EventKind
    slice_name: Optional[str]
    detail: str


class GenerationLog:
    """Collects generation events and warnings"""

    def __init__(self) -> None:
        self.events: List[GenerationEvent] = []
        self.warnings: List[str] = []

    def log_event(self, kind: EventKind, slice_name: Optional[str], detail: str) -> None:
        """Log a generation event

        Args:
            kind: Event kind
            slice_name: Slice being generated, None for run-wide events
            detail: File path, namespace or type name the event is about
        """
        self.events.append(GenerationEvent(kind=kind, slice_name=slice_name, detail=detail))

    def log_warning(self, message: str) -> None:
        self.warnings.append(message)

    def events_of(self, kind: EventKind) -> List[GenerationEvent]:
        return [event for event in self.events if event.kind == kind]

    def written_files(self) -> List[str]:
        return [event.detail for event in self.events_of(EventKind.FILE_WRITTEN)]

    def get_summary(self) -> Dict:
        """Get summary statistics

        Returns:
            Dictionary with event counts
        """
        by_kind: Dict[EventKind, int] = {}
        for event in self.events:
            by_kind[event.kind] = by_kind.get(event.kind, 0) + 1

        return {
            "total_events": len(self.events),
            "events_by_kind": by_kind,
            "total_warnings": len(self.warnings),
        }

    def print_summary(self) -> str:
        """Generate formatted summary string"""
        summary = self.get_summary()
        lines = ["=== Generation Summary ==="]

        for kind in EventKind:
            lines.append(f"{kind.value}: {summary['events_by_kind'].get(kind, 0)}")

        aliased = self.events_of(EventKind.NAMESPACE_ALIASED)
        if aliased:
            lines.append("")
            lines.append("Aliased namespaces:")
            for event in aliased:
                lines.append(f"  {event.slice_name}: ${event.detail}")

        ignored = self.events_of(EventKind.TYPE_IGNORED)
        if ignored:
            lines.append("")
            lines.append("Ignored types:")
            for event in ignored:
                lines.append(f"  {event.slice_name}: {event.detail}")

        lines.append("")
        lines.append(f"Warnings: {summary['total_warnings']}")
        for warning in self.warnings:
            lines.append(f"  {warning}")

        return "\n".join(lines)

    def clear(self) -> None:
        self.events.clear()
        self.warnings.clear()
