"""Pytest configuration and shared fixtures."""

from collections.abc import Generator

import pytest

from electoral_access.config import get_settings
from electoral_access.core.permissions import (
    PermissionEvaluator,
    Role,
    TerritoryHierarchy,
    UserContext,
    default_table,
)


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Re-read settings for every test so monkeypatched env vars apply."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def evaluator() -> PermissionEvaluator:
    """Evaluator over the canonical permission table."""
    return PermissionEvaluator(default_table())


@pytest.fixture
def hierarchy() -> TerritoryHierarchy:
    """Two regions, three departments, five arrondissements.

    Region 1: departments 10 (arr. 101, 102) and 12 (arr. 121)
    Region 2: department 7 (arr. 71, 72)
    """
    return TerritoryHierarchy(
        department_of={101: 10, 102: 10, 121: 12, 71: 7, 72: 7},
        region_of={10: 1, 12: 1, 7: 2},
    )


@pytest.fixture
def scrutineer() -> UserContext:
    return UserContext(
        roles=(Role.SCRUTINEER,),
        arrondissement_code=101,
        department_code=10,
        region_code=1,
    )


@pytest.fixture
def observer() -> UserContext:
    return UserContext(
        roles=(Role.LOCAL_OBSERVER,),
        arrondissement_code=71,
        department_code=7,
        region_code=2,
    )


@pytest.fixture
def validator() -> UserContext:
    return UserContext(roles=(Role.VALIDATOR,), department_code=10, region_code=1)


@pytest.fixture
def supervisor() -> UserContext:
    return UserContext(
        roles=(Role.DEPARTMENT_SUPERVISOR,),
        department_code=12,
        region_code=1,
    )


@pytest.fixture
def administrator() -> UserContext:
    return UserContext(roles=(Role.ADMINISTRATOR,))


@pytest.fixture
def documents() -> list[dict]:
    """Arrondissement documents spread across the test hierarchy."""
    return [
        {"id": 1, "arrondissement_code": 101, "department_code": 10, "region_code": 1},
        {"id": 2, "arrondissement_code": 102, "department_code": 10, "region_code": 1},
        {"id": 3, "arrondissement_code": 121, "department_code": 12, "region_code": 1},
        {"id": 4, "arrondissement_code": 71, "department_code": 7, "region_code": 2},
        {"id": 5, "arrondissement_code": 72, "department_code": 7, "region_code": 2},
    ]
