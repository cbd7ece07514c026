"""POST /v1/upload-csv - Score an uploaded CSV of transactions"""

import time
import logging
from typing import Sequence
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ecofinance.api.v1.schemas import CSVUploadRequest, ParseErrorResponse, SustainabilityScoreSchema, UploadResponse
from ecofinance.api.dependencies import get_owner_id, get_request_id
from ecofinance.infrastructure.database.session import get_db
from ecofinance.infrastructure.database.repositories import BatchRepository
from ecofinance.domain.csv_parser import parse_csv
from ecofinance.domain.models import RawRow
from ecofinance.domain.scoring import process_transactions
from ecofinance.domain.exceptions import CSVParseError, EmptyBatchError, InvalidAmountError, InvalidDateError
from ecofinance.infrastructure.observability.metrics import record_batch, record_rejected_batch
from ecofinance.infrastructure.observability.logging import log_batch

router = APIRouter()


def score_and_store(
    rows: Sequence[RawRow],
    owner_id: int,
    source: str,
    db: Session,
    request_id: str,
    message: str,
) -> UploadResponse:
    """
    Score rows, persist the batch and commit.

    Domain errors propagate to the caller with nothing written.
    """
    start_time = time.time()

    batch = process_transactions(rows, owner_id)
    transactions, score, _ = BatchRepository(db).save_batch(batch)
    db.commit()

    duration_ms = (time.time() - start_time) * 1000
    record_batch(source, len(transactions), score.overall_score)
    log_batch(request_id, owner_id, source, len(transactions), score.overall_score, duration_ms)

    return UploadResponse(
        message=message,
        transactions_count=len(transactions),
        sustainability_score=SustainabilityScoreSchema(
            id=score.id,
            owner_id=score.owner_id,
            overall_score=score.overall_score,
            carbon_footprint=score.carbon_footprint,
            sustainable_purchases=score.sustainable_purchases,
            water_usage=score.water_usage,
            date=score.date,
        ),
    )


@router.post(
    "/upload-csv",
    response_model=UploadResponse,
    responses={400: {"model": ParseErrorResponse}},
)
async def upload_csv(
    request_body: CSVUploadRequest,
    request: Request,
    db: Session = Depends(get_db),
    owner_id: int = Depends(get_owner_id),
):
    """
    Parse a CSV upload, score every transaction and store the results.

    Flow:
    1. Parse CSV text into rows
    2. Score rows and build the summary and category breakdowns
    3. Persist transactions, summary and breakdowns in one commit
    """
    request_id = get_request_id(request)

    try:
        rows = parse_csv(request_body.csv_data)
        return score_and_store(rows, owner_id, "csv", db, request_id, "CSV data processed successfully")

    except CSVParseError as e:
        db.rollback()
        record_rejected_batch("csv")
        logging.warning(f"CSV parse error: {e.message}", extra={"request_id": request_id, "line_number": e.line_number})
        return JSONResponse(
            status_code=400,
            content={"detail": f"CSV parsing error: {e.message}", "line_number": e.line_number},
        )

    except (InvalidAmountError, InvalidDateError) as e:
        db.rollback()
        record_rejected_batch("csv")
        logging.warning(f"Invalid row data: {e}", extra={"request_id": request_id})
        return JSONResponse(status_code=400, content={"detail": str(e), "line_number": None})

    except EmptyBatchError as e:
        db.rollback()
        record_rejected_batch("csv")
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Failed to process CSV data")
