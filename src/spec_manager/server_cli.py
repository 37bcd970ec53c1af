"""CLI entry point for the spec manager API server."""

import argparse
import asyncio

from spec_manager.config import settings


async def _seed() -> dict:
    from spec_manager.db.base import Base
    from spec_manager.db.engine import create_db_engine, create_session_factory
    from spec_manager.services.seed import seed_database
    import spec_manager.db.models  # noqa: F401 register all ORM models

    engine = create_db_engine(settings.database_url)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        async with create_session_factory(engine)() as session:
            counts = await seed_database(session)
            await session.commit()
    finally:
        await engine.dispose()
    return counts


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="spec-manager-server",
        description="Spec manager API server: form schema administration and specification authoring",
    )
    parser.add_argument("--host", default=settings.host, help=f"Bind host (default: {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"Bind port (default: {settings.port})")
    parser.add_argument(
        "--seed",
        action="store_true",
        help="Create tables and seed roles, demo users and the default schema, then exit",
    )
    args = parser.parse_args(argv)

    if args.seed:
        from spec_manager.logging_config import configure_logging

        configure_logging(log_level=settings.log_level)
        counts = asyncio.run(_seed())
        print(f"Seed complete: {counts}")
        return

    import uvicorn

    uvicorn.run("spec_manager.main:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
