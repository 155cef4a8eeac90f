"""CRUD against ``users``, each verb performed several ways.

Every verb runs the same operation through:

* the ORM's fluent builder (``select()`` / ``insert()`` / ``update()`` /
  ``delete()`` on ``UserTable``),
* raw parameterized SQL on the same session, mapped back onto ``UserTable``
  or into plain dicts,
* direct statement execution on the session's connection, with the row
  decoded by hand (:func:`print_query_result`).

Verbs share one ``AsyncSession``, print what the library hands back, and let
library errors propagate.

Run: ``ormdemo run`` (or ``python -m ormdemo run``)
"""

from __future__ import annotations

import uuid

from sqlalchemy import Row, text
from sqlalchemy import delete as sa_delete
from sqlalchemy import insert as sa_insert
from sqlalchemy import select as sa_select
from sqlalchemy import update as sa_update
from sqlalchemy.ext.asyncio import AsyncSession

from ormdemo.errors import DecodeError, QueryError, RecordNotUpdated
from ormdemo.logging import LogContext, get_logger
from ormdemo.migrations import Migrator
from ormdemo.orm.session import connect, demo_session_factory
from ormdemo.orm.tables import UserTable
from ormdemo.results import (
    DeleteReport,
    DeleteResult,
    ExecResult,
    InsertResult,
    NameReport,
    QueryResultView,
    SelectReport,
)
from ormdemo.settings import DemoSettings

logger = get_logger(__name__)

NAME = "itsuki"
LIKE_NAME = f"%{NAME}%"

INSERT_USER_SQL = "INSERT INTO users (id, username) VALUES (:id, :username) RETURNING *"
UPDATE_USERNAME_SQL = "UPDATE users SET username = :username WHERE id = :id RETURNING *"
SELECT_USERS_SQL = "SELECT * FROM users WHERE username LIKE :pattern"
SELECT_USERNAMES_SQL = "SELECT username FROM users WHERE username LIKE :pattern"
DELETE_USERS_SQL = "DELETE FROM users WHERE username LIKE :pattern"

# (id, username, age)
_ROW_TYPES = (str, str, int)


def print_query_result(row: Row) -> QueryResultView:
    """Decode a raw ``users`` row into ``(str, str, int)`` and print it.

    Raises ``DecodeError`` when the row has the wrong number of columns or a
    value of the wrong type.
    """
    columns = list(row._fields)
    values = tuple(row)
    if len(values) != len(_ROW_TYPES):
        raise DecodeError(
            f"expected {len(_ROW_TYPES)} columns, got {len(values)}"
        ).with_context(columns=columns)
    for column, value, expected in zip(columns, values, _ROW_TYPES):
        # bool is an int subclass; a boolean column is still a decode error
        if not isinstance(value, expected) or isinstance(value, bool):
            raise DecodeError(
                f"column {column!r}: expected {expected.__name__}, got {type(value).__name__}"
            ).with_context(column=column)

    view = QueryResultView(columns=columns, values=values)
    print(f"columns: {view.columns}")
    print(f"values: {view.values}")
    return view


async def insert(session: AsyncSession) -> str:
    """Insert three users; return the id of the one inserted by the builder."""
    async with LogContext(verb="insert"):
        # fluent builder
        stmt = (
            sa_insert(UserTable)
            .values(id=str(uuid.uuid4()), username="new_itsuki_seaquery")
            .returning(UserTable.id)
        )
        response = InsertResult(last_insert_id=(await session.execute(stmt)).scalar_one())
        print(response)
        last_id = response.last_insert_id

        # from json
        user = UserTable.from_json(
            {
                "id": str(uuid.uuid4()),
                "username": "new_itsuki_json",
                "age": 1000000,
            }
        )
        session.add(user)
        await session.flush()
        print(InsertResult(last_insert_id=user.id))

        # raw statement
        conn = await session.connection()
        result = await conn.execute(
            text(INSERT_USER_SQL),
            {"id": str(uuid.uuid4()), "username": "new_itsuki_raw"},
        )
        row = result.first()
        if row is None:
            raise QueryError("failed to get query result!")
        print_query_result(row)

        await session.commit()
        logger.info("demo.insert.done", last_insert_id=last_id)
        return last_id


async def update(session: AsyncSession, user_id: str) -> UserTable:
    """Rename the builder-inserted user, then rename the seed row by raw SQL."""
    async with LogContext(verb="update"):
        stmt = (
            sa_update(UserTable)
            .where(UserTable.id == user_id, UserTable.username.contains("sea"))
            .values(username="updated_itsuki_seaquery")
            .returning(UserTable)
            .execution_options(synchronize_session=False)
        )
        model = (await session.scalars(stmt)).one_or_none()
        if model is None:
            raise RecordNotUpdated("None of the records are updated").with_context(id=user_id)
        print(model)

        result = await session.execute(
            text(UPDATE_USERNAME_SQL), {"username": user_id, "id": "1"}
        )
        response = ExecResult(rows_affected=len(result.all()))
        print(response)

        await session.commit()
        logger.info("demo.update.done", id=model.id, seed_rows=response.rows_affected)
        return model


async def select(session: AsyncSession) -> SelectReport:
    async with LogContext(verb="select"):
        report = SelectReport()
        matches = UserTable.username.contains(NAME)

        # fluent builder
        report.orm_all = list((await session.scalars(sa_select(UserTable).where(matches))).all())
        print(f"sea orm: all itsukis: {report.orm_all}")

        report.orm_first = (
            await session.scalars(sa_select(UserTable).where(matches).limit(1))
        ).first()
        print(f"sea orm: first itsuki: {report.orm_first}")

        # raw SQL mapped onto the entity
        stmt = sa_select(UserTable).from_statement(text(SELECT_USERS_SQL))
        report.raw_all = list((await session.scalars(stmt, {"pattern": LIKE_NAME})).all())
        print(f"raw: all itsukis: {report.raw_all}")

        # raw SQL, decoded by hand
        conn = await session.connection()
        row = (await conn.execute(text(SELECT_USERS_SQL), {"pattern": LIKE_NAME})).first()
        if row is None:
            raise QueryError("failed to get query result")
        report.decoded = print_query_result(row)

        logger.info("demo.select.done", matches=len(report.orm_all))
        return report


async def select_name(session: AsyncSession) -> NameReport:
    """Fetch only the ``username`` column, as JSON-like dicts."""
    async with LogContext(verb="select_name"):
        report = NameReport()

        result = await session.execute(
            sa_select(UserTable.username).where(UserTable.username.contains(NAME))
        )
        report.orm = [dict(m) for m in result.mappings().all()]
        print(f"sea orm: all itsukis: {report.orm}")

        result = await session.execute(text(SELECT_USERNAMES_SQL), {"pattern": LIKE_NAME})
        report.raw = [dict(m) for m in result.mappings().all()]
        print(f"raw: all itsukis: {report.raw}")

        logger.info("demo.select_name.done", matches=len(report.raw))
        return report


async def delete(session: AsyncSession, model: UserTable) -> DeleteReport:
    """Delete *model* through the unit of work, by id, then every itsuki by raw SQL."""
    async with LogContext(verb="delete"):
        # SELECT even when model is already in the identity map
        target = await session.get(UserTable, model.id, populate_existing=True)
        deleted = 0
        if target is not None:
            await session.delete(target)
            await session.flush()
            deleted = 1
        by_model = DeleteResult(rows_affected=deleted)
        print(by_model)

        result = await session.execute(sa_delete(UserTable).where(UserTable.id == model.id))
        by_id = DeleteResult(rows_affected=result.rowcount)
        print(by_id)

        result = await session.execute(text(DELETE_USERS_SQL), {"pattern": LIKE_NAME})
        raw = DeleteResult(rows_affected=result.rowcount)
        print(f"response: {raw}")

        await session.commit()
        report = DeleteReport(by_model=by_model, by_id=by_id, raw=raw)
        logger.info(
            "demo.delete.done",
            by_model=by_model.rows_affected,
            by_id=by_id.rows_affected,
            raw=raw.rows_affected,
        )
        return report


async def run_demo(settings: DemoSettings) -> None:
    """Migrate, then run insert → update → select → select_name → delete."""
    engine = connect(settings)
    try:
        await Migrator(engine).up()
        async with demo_session_factory(engine)() as session:
            user_id = await insert(session)
            model = await update(session, user_id)
            await select(session)
            await select_name(session)
            await delete(session, model)
    finally:
        await engine.dispose()


__all__ = [
    "insert",
    "update",
    "select",
    "select_name",
    "delete",
    "print_query_result",
    "run_demo",
]
