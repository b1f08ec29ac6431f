"""Unit tests for GetServiceActivityUseCase."""

from uuid import uuid4

import pytest

from flow.application.usecase.service import (
    GetServiceActivityRequest,
    GetServiceActivityUseCase,
)
from flow.domain.error import NotAuthorizedError
from flow.domain.repository import ServiceRepository
from tests.conftest import make_service
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestGetServiceActivityUseCase:
    """Tests for GetServiceActivityUseCase."""

    @pytest.mark.asyncio
    async def test_activity_only_for_owner(self, unit_env):
        services = await unit_env.get(ServiceRepository)
        service = await services.save(make_service())

        with pytest.raises(NotAuthorizedError):
            await (await unit_env.get(GetServiceActivityUseCase)).execute(
                GetServiceActivityRequest(
                    service_id=str(service.id), requester_id=str(uuid4())
                )
            )

    @pytest.mark.asyncio
    async def test_activity_default_window(self, unit_env):
        services = await unit_env.get(ServiceRepository)
        service = await services.save(make_service())

        response = await (await unit_env.get(GetServiceActivityUseCase)).execute(
            GetServiceActivityRequest(
                service_id=str(service.id), requester_id=str(service.id)
            )
        )

        assert response.days == 7
        assert len(response.activity) == 7
