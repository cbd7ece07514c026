"""POST /v1/bank/sync - Pull recent aggregator transactions and score them"""

import logging
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from ecofinance.api.v1.schemas import BankSyncRequest, UploadResponse
from ecofinance.api.v1.uploads import score_and_store
from ecofinance.api.dependencies import get_bank_client, get_owner_id, get_request_id
from ecofinance.infrastructure.database.session import get_db
from ecofinance.infrastructure.clients.bank import BankClient
from ecofinance.domain.exceptions import BankAPIError, EmptyBatchError, InvalidAmountError, InvalidDateError
from ecofinance.infrastructure.observability.metrics import bank_fetch_failures_counter, record_rejected_batch
from ecofinance.config import settings
from ecofinance.utils.date_utils import trailing_window

router = APIRouter()


@router.post("/bank/sync", response_model=UploadResponse)
async def sync_bank_transactions(
    request_body: BankSyncRequest,
    request: Request,
    db: Session = Depends(get_db),
    owner_id: int = Depends(get_owner_id),
    bank_client: BankClient = Depends(get_bank_client),
):
    """
    Fetch the last `days` of transactions from the aggregator and score them
    as one batch, exactly like a CSV upload.
    """
    request_id = get_request_id(request)
    start_date, end_date = trailing_window(date.today(), request_body.days)

    try:
        rows = await bank_client.get_transactions(
            request_body.access_token,
            start_date,
            end_date,
            count=settings.bank_sync_max_transactions,
        )
        return score_and_store(rows, owner_id, "bank", db, request_id, "Bank transactions processed successfully")

    except BankAPIError as e:
        bank_fetch_failures_counter.inc()
        db.rollback()
        logging.error(f"Bank API error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Bank service unavailable")

    except EmptyBatchError as e:
        db.rollback()
        record_rejected_batch("bank")
        logging.warning(f"No transactions to score: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail="No transactions returned for this period")

    except (InvalidAmountError, InvalidDateError) as e:
        db.rollback()
        record_rejected_batch("bank")
        logging.warning(f"Invalid bank data: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=502, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")
