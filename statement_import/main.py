import argparse
import json
import sys
from pathlib import Path

from statement_import.config.settings import Settings
from statement_import.importer.exceptions import ExtractionCancelled, ExtractionFailedError
from statement_import.importer.models import ImportReview
from statement_import.importer.pipeline import ImportPipeline
from statement_import.logging.logger import Log
from statement_import.pdf.factory import PdfExtractorFactory
from statement_import.pdf.models import RawDocument
from statement_import.worker.messages import ProgressMessage
from statement_import.worker.worker import ExtractionWorker

EXIT_OK = 0
EXIT_EXTRACTION_FAILED = 1
EXIT_UNSUPPORTED = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="statement-import",
        description="Extract, parse and review a bank statement PDF.",
    )
    parser.add_argument("pdf", type=Path, help="statement PDF to import")
    parser.add_argument("--account-id", default="default", help="ledger account to import into")
    parser.add_argument("--institution", default=None, help="institution code to try first")
    parser.add_argument(
        "--engine",
        choices=PdfExtractorFactory.engines(),
        default=None,
        help="PDF engine (defaults to PDF_ENGINE)",
    )
    return parser


def review_to_dict(review: ImportReview) -> dict:
    result = review.parse_result
    summary = review.summary
    return {
        "success": result.success,
        "institution": result.institution_code,
        "parser": result.parser_name,
        "account_name": result.account_name,
        "account_number": result.account_number,
        "statement_period": (
            {
                "start": result.statement_period.start.isoformat(),
                "end": result.statement_period.end.isoformat(),
            }
            if result.statement_period
            else None
        ),
        "errors": list(result.errors),
        "warnings": list(result.warnings),
        "owner": {
            "detected_name": review.owner.detected_name,
            "confidence": round(review.owner.confidence, 3),
            "suggested_member_name": review.owner.suggested_member_name,
            "is_new_member": review.owner.is_new_member,
        },
        "summary": {
            "total_count": summary.total_count,
            "selected_count": summary.selected_count,
            "duplicate_count": len(review.duplicates),
            "credit_count": summary.credit_count,
            "credit_total": summary.credit_total,
            "debit_count": summary.debit_count,
            "debit_total": summary.debit_total,
        },
        "transactions": [
            {
                "date": tx.date.isoformat(),
                "description": tx.description,
                "amount": tx.amount,
                "kind": tx.kind.value,
                "balance": tx.balance,
            }
            for tx in review.unique
        ],
    }


def main(argv: list[str] | None = None) -> int:
    """Entry point: read the PDF -> extract on the worker -> parse -> print the review."""
    args = build_parser().parse_args(argv)
    overrides = {"pdf_engine": args.engine} if args.engine else {}
    settings = Settings(**overrides)
    Log.configure(settings.log_level)

    try:
        content = args.pdf.read_bytes()
    except OSError as exc:
        Log.error(f"Cannot read {args.pdf}: {exc}")
        return EXIT_EXTRACTION_FAILED

    worker = ExtractionWorker(settings=settings)
    job = worker.submit(RawDocument(content=content, file_name=args.pdf.name))
    for message in job.messages():
        if isinstance(message, ProgressMessage):
            print(f"[{message.percent:3d}%] {message.message}", file=sys.stderr)

    pipeline = ImportPipeline(settings=settings)
    try:
        review = pipeline.review_job(
            job,
            account_id=args.account_id,
            preferred_institution=args.institution,
        )
    except (ExtractionFailedError, ExtractionCancelled) as exc:
        Log.error(f"Extraction failed: {exc}")
        return EXIT_EXTRACTION_FAILED

    print(json.dumps(review_to_dict(review), indent=2))
    return EXIT_OK if review.parse_result.success else EXIT_UNSUPPORTED


if __name__ == "__main__":
    sys.exit(main())
