"""
Integration tests for the API client, pipeline and CLI against a fake API.
"""

import pytest

from association_validator import cli
from association_validator.client import AssociationsClient, TransportStatusError
from association_validator.models import ApiMode
from association_validator.validation import ValidationPipeline


@pytest.mark.asyncio
async def test_fetch_validate_submit(fake_api, test_settings, sample_expected_data):
    pipeline = ValidationPipeline(test_settings)

    async with AssociationsClient.from_settings(test_settings, transport=fake_api.transport) as client:
        dataset = await client.fetch_dataset(ApiMode.LIVE)
        result = pipeline.validate(dataset)
        await client.submit_results(result, ApiMode.LIVE)

    assert fake_api.submissions["live"] == [sample_expected_data]
    assert fake_api.submissions["test"] == []


@pytest.mark.asyncio
async def test_wrong_user_key_is_rejected(fake_api, test_settings):
    settings = test_settings.model_copy(update={"API_USER_KEY": "wrong"})

    async with AssociationsClient.from_settings(settings, transport=fake_api.transport) as client:
        with pytest.raises(TransportStatusError) as exc_info:
            await client.fetch_dataset(ApiMode.TEST)

    assert exc_info.value.status_code == 401


@pytest.mark.asyncio
async def test_cli_flow_against_fake_api(fake_api, test_settings):
    summary, exit_code = await cli.execute_contact_validations(
        test_settings, ApiMode.TEST, compare=True, transport=fake_api.transport
    )

    assert exit_code == cli.EXIT_OK
    assert summary["comparison"]["matches"] is True
    assert len(fake_api.submissions["test"]) == 1
    assert len(summary["validAssociations"]) == 3
    assert len(summary["invalidAssociations"]) == 6
