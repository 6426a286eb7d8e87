# app/core/migrations.py
# 啟動時建立資料表 (AUTO_MIGRATE=true 時由 main.py 的 lifespan 呼叫)
import logging
from sqlalchemy import Table, inspect, text
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import AsyncEngine

from app.core.database import Base
from app.models.user import User
from app.models.freelancer_profile import FreelancerProfile
from app.models.job_posting import JobPosting
from app.models.job_application import JobApplication

logger = logging.getLogger(__name__)

# 依建立順序排列
MIGRATION_TABLES = [
    User.__table__,
    FreelancerProfile.__table__,
    JobPosting.__table__,
    JobApplication.__table__,
]


def _add_missing_columns(conn: Connection, table: Table) -> None:
    """
    補上已存在資料表缺少的欄位 (create_all 只會建立新表)
    新增的欄位一律允許 NULL，既有資料列不需要預設值
    """
    existing = {c["name"] for c in inspect(conn).get_columns(table.name)}
    preparer = conn.dialect.identifier_preparer
    for column in table.columns:
        if column.name in existing:
            continue
        column_type = column.type.compile(dialect=conn.dialect)
        conn.execute(text(
            f"ALTER TABLE {preparer.quote(table.name)} "
            f"ADD COLUMN {preparer.quote(column.name)} {column_type}"
        ))
        logger.info(f"Added column: {table.name}.{column.name}")


async def migrate_freelancer_tables(engine: AsyncEngine) -> None:
    """建立尚未存在的資料表，並補上既有資料表缺少的欄位"""
    async with engine.begin() as conn:
        for table in MIGRATION_TABLES:
            logger.info(f"Migrating table: {table.name}")
            await conn.run_sync(Base.metadata.create_all, tables=[table], checkfirst=True)
            await conn.run_sync(_add_missing_columns, table)
    logger.info("資料表建立完成")
