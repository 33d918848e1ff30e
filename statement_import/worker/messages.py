from dataclasses import dataclass

from statement_import.pdf.models import ExtractedContent


@dataclass(frozen=True)
class ProgressMessage:
    job_id: str
    percent: int
    message: str


@dataclass(frozen=True)
class ContentMessage:
    job_id: str
    content: ExtractedContent


@dataclass(frozen=True)
class ErrorMessage:
    job_id: str
    error: str


@dataclass(frozen=True)
class CancelledMessage:
    job_id: str


WorkerMessage = ProgressMessage | ContentMessage | ErrorMessage | CancelledMessage

# Exactly one of these ends every job's message stream.
TERMINAL_MESSAGES = (ContentMessage, ErrorMessage, CancelledMessage)


def is_terminal(message: WorkerMessage) -> bool:
    return isinstance(message, TERMINAL_MESSAGES)
