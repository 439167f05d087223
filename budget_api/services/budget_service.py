import time

from sqlalchemy import delete
from sqlalchemy.future import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.dialects.mysql import insert as mysql_insert
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from budget_api.models.budget import BudgetModel, MONEY_FIELDS
from budget_api.schemas.budget import BudgetCreate, BudgetUpdate, BudgetSync
from budget_api.utils.logger import app_logger


class BudgetNotFoundError(Exception):
    def __init__(self, month: str):
        super().__init__(f"Budget not found: {month}")
        self.month = month


def now_ms() -> int:
    return int(time.time() * 1000)


def build_upsert(dialect_name: str, values: dict):
    """
    Build a single INSERT that overwrites every money field and updated_at
    when the month already exists
    """
    update_fields = MONEY_FIELDS + ("updated_at",)

    if dialect_name in ("mysql", "mariadb"):
        stmt = mysql_insert(BudgetModel).values(**values)
        return stmt.on_duplicate_key_update({field: stmt.inserted[field] for field in update_fields})

    if dialect_name == "postgresql":
        stmt = postgresql_insert(BudgetModel).values(**values)
    elif dialect_name == "sqlite":
        stmt = sqlite_insert(BudgetModel).values(**values)
    else:
        raise NotImplementedError(f"Upsert is not supported for dialect: {dialect_name}")

    return stmt.on_conflict_do_update(
        index_elements=[BudgetModel.month],
        set_={field: stmt.excluded[field] for field in update_fields}
    )


class BudgetService:
    @staticmethod
    async def list_budgets(db: AsyncSession) -> list:
        result = await db.execute(select(BudgetModel).order_by(BudgetModel.month.asc()))
        budgets = result.scalars().all()
        app_logger.info(f"Fetched {len(budgets)} budgets")
        return budgets

    @staticmethod
    async def get_budget(db: AsyncSession, month: str) -> BudgetModel:
        budget = await db.get(BudgetModel, month)
        if budget is None:
            raise BudgetNotFoundError(month)
        return budget

    @staticmethod
    async def create_budget(db: AsyncSession, payload: BudgetCreate) -> BudgetModel:
        """
        Insert a new budget row

        A duplicate month is left to the primary key constraint and surfaces
        as an IntegrityError.
        """
        budget = BudgetModel(**payload.model_dump(), updated_at=now_ms())
        db.add(budget)
        await db.commit()
        await db.refresh(budget)
        app_logger.info(f"Created budget for month: {budget.month}")
        return budget

    @staticmethod
    async def update_budget(db: AsyncSession, month: str, payload: BudgetUpdate) -> BudgetModel:
        """
        Apply a partial update to an existing budget

        Args:
            db: database session
            month: primary key of the budget
            payload: only the fields present in the request body are written,
                so an explicit 0 or null replaces the stored value

        Returns:
            BudgetModel: the updated row
        """
        budget = await db.get(BudgetModel, month)
        if budget is None:
            raise BudgetNotFoundError(month)

        fields = payload.model_dump(exclude_unset=True)
        app_logger.debug(f"Updating budget {month} fields: {sorted(fields)}")
        for field, value in fields.items():
            setattr(budget, field, value)
        budget.updated_at = now_ms()

        await db.commit()
        await db.refresh(budget)
        app_logger.info(f"Updated budget for month: {month}")
        return budget

    @staticmethod
    async def delete_budget(db: AsyncSession, month: str):
        result = await db.execute(delete(BudgetModel).where(BudgetModel.month == month))
        await db.commit()
        if result.rowcount == 0:
            raise BudgetNotFoundError(month)
        app_logger.info(f"Deleted budget for month: {month}")

    @staticmethod
    async def sync_budget(db: AsyncSession, payload: BudgetSync) -> int:
        """
        Upsert a budget from the client's nested shape

        Returns:
            int: the updated_at timestamp that was written
        """
        timestamp = now_ms()
        values = {
            "month": payload.month,
            "income": payload.income,
            **payload.expenses.model_dump(),
            "updated_at": timestamp,
        }

        stmt = build_upsert(db.get_bind().dialect.name, values)
        await db.execute(stmt)
        await db.commit()
        app_logger.info(f"Synced budget for month: {payload.month}")
        return timestamp
