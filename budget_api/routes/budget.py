from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from budget_api.database import get_db
from budget_api.schemas.budget import BudgetCreate, BudgetUpdate, BudgetResponse, MessageResponse
from budget_api.services.budget_service import BudgetService, BudgetNotFoundError
from budget_api.utils.logger import app_logger

router = APIRouter()

NOT_FOUND = "Budget not found"


@router.get("", response_model=List[BudgetResponse])
async def list_budgets(db: AsyncSession = Depends(get_db)):
    try:
        return await BudgetService.list_budgets(db)
    except SQLAlchemyError as e:
        app_logger.error(f"list_budgets SQLAlchemyError {str(e)}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    except Exception as e:
        app_logger.error(f"list_budgets Exception {str(e)}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.get("/{month}", response_model=BudgetResponse)
async def get_budget(month: str, db: AsyncSession = Depends(get_db)):
    try:
        return await BudgetService.get_budget(db, month)
    except BudgetNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    except SQLAlchemyError as e:
        app_logger.error(f"get_budget SQLAlchemyError {str(e)}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    except Exception as e:
        app_logger.error(f"get_budget Exception {str(e)}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.post("", response_model=BudgetResponse, status_code=status.HTTP_201_CREATED)
async def create_budget(budget: BudgetCreate, db: AsyncSession = Depends(get_db)):
    try:
        return await BudgetService.create_budget(db, budget)
    except SQLAlchemyError as e:
        # duplicate months land here too
        app_logger.error(f"create_budget SQLAlchemyError {str(e)}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    except Exception as e:
        app_logger.error(f"create_budget Exception {str(e)}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.put("/{month}", response_model=BudgetResponse)
async def update_budget(month: str, budget: BudgetUpdate, db: AsyncSession = Depends(get_db)):
    try:
        return await BudgetService.update_budget(db, month, budget)
    except BudgetNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    except SQLAlchemyError as e:
        app_logger.error(f"update_budget SQLAlchemyError {str(e)}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    except Exception as e:
        app_logger.error(f"update_budget Exception {str(e)}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.delete("/{month}", response_model=MessageResponse)
async def delete_budget(month: str, db: AsyncSession = Depends(get_db)):
    try:
        await BudgetService.delete_budget(db, month)
        return {"message": "Budget deleted successfully"}
    except BudgetNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    except SQLAlchemyError as e:
        app_logger.error(f"delete_budget SQLAlchemyError {str(e)}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    except Exception as e:
        app_logger.error(f"delete_budget Exception {str(e)}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
