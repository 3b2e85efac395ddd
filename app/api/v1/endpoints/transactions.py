"""
Transaction API endpoints
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.deps import announce, get_category_or_404, get_or_404
from app.core.redis_client import RedisClient, get_redis
from app.crud.finance import transaction as crud_transaction
from app.db.session import get_db
from app.models.finance import TransactionType
from app.schemas.finance import TransactionCreate, TransactionResponse, TransactionUpdate
from app.services.schema_registry import CategoryType

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=List[TransactionResponse])
def get_transactions(
    db: Session = Depends(get_db),
    category_id: Optional[int] = Query(None, description="Only transactions of this category"),
    type: Optional[TransactionType] = Query(None, description="Filter by type: income, expense or transfer"),
):
    """
    Get transactions, most recent first
    """
    return crud_transaction.get_multi(db=db, category_id=category_id, type=type)


@router.get("/{transaction_id}", response_model=TransactionResponse)
def get_transaction(transaction_id: int, db: Session = Depends(get_db)):
    """
    Get specific transaction by ID
    """
    return get_or_404(crud_transaction, db, transaction_id, "Transaction")


@router.post("/",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED
    )
def create_transaction(
    transaction_in: TransactionCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    redis: RedisClient = Depends(get_redis)
):
    """
    Record a transaction in a finance category
    """
    get_category_or_404(db, transaction_in.category_id, [CategoryType.FINANCE])
    transaction = crud_transaction.create(db=db, obj_in=transaction_in)
    logger.info(f"Transaction recorded: {transaction.id} ({transaction.type.value})")
    announce(background_tasks, redis, "transactions")
    return transaction


@router.put("/{transaction_id}", response_model=TransactionResponse)
def update_transaction(
    transaction_id: int,
    transaction_in: TransactionUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    redis: RedisClient = Depends(get_redis)
):
    """
    Update transaction
    """
    transaction = get_or_404(crud_transaction, db, transaction_id, "Transaction")
    transaction = crud_transaction.update(db=db, db_obj=transaction, obj_in=transaction_in)
    announce(background_tasks, redis, "transactions")
    return transaction


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_transaction(
    transaction_id: int,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    redis: RedisClient = Depends(get_redis)
):
    """
    Delete transaction
    """
    get_or_404(crud_transaction, db, transaction_id, "Transaction")
    crud_transaction.delete(db=db, id=transaction_id)
    announce(background_tasks, redis, "transactions")
    return None
