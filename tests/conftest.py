"""Shared fixtures: a throwaway SQLite database per test."""

from datetime import date

import pytest

from servicelog import (
    Car,
    ServiceInput,
    ServiceKind,
    init_db,
    make_engine,
    make_session_factory,
)


@pytest.fixture
def engine(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'servicelog.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    session = make_session_factory(engine)()
    yield session
    session.close()


@pytest.fixture
def make_car(session):
    """Factory for persisted cars."""

    def _make_car(owner_id="alice", current_mileage=70000, **kwargs):
        fields = dict(
            make="Toyota",
            model="Avanza",
            year=2019,
            license_plate="B 1234 XYZ",
        )
        fields.update(kwargs)
        car = Car(owner_id=owner_id, current_mileage=current_mileage, **fields)
        session.add(car)
        session.commit()
        return car

    return _make_car


@pytest.fixture
def service_input():
    """Factory for validated service inputs."""

    def _service_input(
        service_type=ServiceKind.OIL_CHANGE,
        service_date=date(2026, 7, 1),
        mileage=73500,
        **kwargs
    ):
        fields = dict(
            description="Synthetic oil and new filter",
            is_self_service=True,
            service_location="Self Service",
        )
        fields.update(kwargs)
        return ServiceInput(
            service_date=service_date,
            mileage_at_service=mileage,
            service_type=service_type,
            **fields
        )

    return _service_input
