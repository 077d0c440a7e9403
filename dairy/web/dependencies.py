"""Shared FastAPI dependency definitions.

The engine, session factory, security provider and currency converter are
created once by :func:`dairy.main.create_app` and stored on ``app.state``;
the dependencies below hand request-scoped views of them to the routers.
"""
from __future__ import annotations

from collections.abc import Generator

from fastapi import Depends, Request
from sqlalchemy.orm import Session, sessionmaker

from dairy.core.config import Settings
from dairy.core.security import SecurityProvider
from dairy.services import (
    AuthService,
    CurrencyConverter,
    FarmerService,
    FarmService,
    PaymentService,
    ProductionService,
)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db_session(request: Request) -> Generator[Session, None, None]:
    """Yield a database session for the request lifecycle."""

    factory: sessionmaker = request.app.state.session_factory
    session = factory()
    try:
        yield session
    finally:
        session.close()


def get_security(request: Request) -> SecurityProvider:
    return request.app.state.security_provider


def get_currency_converter(request: Request) -> CurrencyConverter:
    return request.app.state.currency_converter


def get_auth_service(
    session: Session = Depends(get_db_session),
    security: SecurityProvider = Depends(get_security),
) -> AuthService:
    return AuthService(session, security)


def get_farmer_service(session: Session = Depends(get_db_session)) -> FarmerService:
    return FarmerService(session)


def get_farm_service(session: Session = Depends(get_db_session)) -> FarmService:
    return FarmService(session)


def get_production_service(session: Session = Depends(get_db_session)) -> ProductionService:
    return ProductionService(session)


def get_payment_service(
    session: Session = Depends(get_db_session),
    converter: CurrencyConverter = Depends(get_currency_converter),
    settings: Settings = Depends(get_app_settings),
) -> PaymentService:
    return PaymentService(
        session,
        converter,
        primary_currency=settings.currency.primary_currency,
        secondary_currency=settings.currency.secondary_currency,
    )
