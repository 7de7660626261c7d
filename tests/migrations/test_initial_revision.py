"""
Migration tests: the Alembic history builds the same schema as the models.
"""

from pathlib import Path

import pytest
import sqlalchemy as sa
from alembic import command
from alembic.config import Config

from runofshow.infra.db import Base

PROJECT_ROOT = Path(__file__).resolve().parents[2]


@pytest.fixture
def alembic_config(tmp_path):
    config = Config(str(PROJECT_ROOT / "alembic.ini"))
    config.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    config.set_main_option("sqlalchemy.url", f"sqlite:///{tmp_path / 'migrated.db'}")
    return config


def test_upgrade_creates_every_model_table(alembic_config):
    command.upgrade(alembic_config, "head")

    engine = sa.create_engine(alembic_config.get_main_option("sqlalchemy.url"))
    try:
        inspector = sa.inspect(engine)
        tables = set(inspector.get_table_names()) - {"alembic_version"}
        assert tables == set(Base.metadata.tables)

        for name, table in Base.metadata.tables.items():
            migrated = {c["name"] for c in inspector.get_columns(name)}
            assert migrated == {c.name for c in table.columns}, name

        uniques = {u["name"] for u in inspector.get_unique_constraints("production_segments")}
        assert "uq_production_segments_production_position" in uniques
    finally:
        engine.dispose()


def test_downgrade_removes_everything(alembic_config):
    command.upgrade(alembic_config, "head")
    command.downgrade(alembic_config, "base")

    engine = sa.create_engine(alembic_config.get_main_option("sqlalchemy.url"))
    try:
        assert set(sa.inspect(engine).get_table_names()) <= {"alembic_version"}
    finally:
        engine.dispose()
