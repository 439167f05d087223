from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from budget_api.database import get_db
from budget_api.schemas.budget import BudgetSync, SyncResponse
from budget_api.services.budget_service import BudgetService
from budget_api.utils.logger import app_logger

router = APIRouter()

SYNC_FAILED = {"success": False, "error": "Failed to sync to database"}


@router.post("/sync", response_model=SyncResponse)
async def sync_budget(budget: BudgetSync, db: AsyncSession = Depends(get_db)):
    """Upsert the client's copy of a month"""
    try:
        timestamp = await BudgetService.sync_budget(db, budget)
        return {"success": True, "timestamp": timestamp}
    except SQLAlchemyError as e:
        app_logger.error(f"sync_budget SQLAlchemyError {str(e)}", exc_info=True)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=SYNC_FAILED)
    except Exception as e:
        app_logger.error(f"sync_budget Exception {str(e)}", exc_info=True)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=SYNC_FAILED)
