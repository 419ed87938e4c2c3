"""Tests for ingredient recalculation."""

import asyncio

import pytest

from nutrition_api.errors import InvalidUpstreamSchema, UnknownError, ValidationError
from nutrition_api.services.recalculation import RecalculationService, build_prompt
from tests.conftest import ANALYSIS_PAYLOAD, FakeCompletionClient


def _service(client: FakeCompletionClient) -> RecalculationService:
    return RecalculationService(
        client=client, model="gpt-4.1-mini", temperature=0.3, max_tokens=1500
    )


def test_build_prompt_numbers_ingredients() -> None:
    prompt = build_prompt(["150 g chicken breast", "200 g white rice"])

    assert "1. 150 g chicken breast\n2. 200 g white rice" in prompt
    assert '"calorias_totais"' in prompt


def test_recalculate_returns_totals() -> None:
    client = FakeCompletionClient()

    result = asyncio.run(
        _service(client).recalculate(["150 g chicken breast", "200 g white rice"])
    )

    assert result == ANALYSIS_PAYLOAD
    call = client.calls[0]
    assert call["model"] == "gpt-4.1-mini"
    assert call["temperature"] == 0.3
    assert call["max_tokens"] == 1500
    assert "JSON" in call["messages"][0]["content"]


def test_recalculate_strips_surrounding_whitespace() -> None:
    client = FakeCompletionClient(content='\n  {"nome_do_prato": "Soup"}  \n')

    result = asyncio.run(_service(client).recalculate(["water"]))

    assert result == {"nome_do_prato": "Soup"}


@pytest.mark.parametrize("ingredients", [None, [], "rice", {"a": 1}])
def test_recalculate_requires_ingredient_list(ingredients: object) -> None:
    client = FakeCompletionClient()

    with pytest.raises(ValidationError):
        asyncio.run(_service(client).recalculate(ingredients))

    assert client.calls == []


def test_unparseable_response_surfaces_parse_error() -> None:
    client = FakeCompletionClient(content="Here is your JSON: {")

    with pytest.raises(InvalidUpstreamSchema) as excinfo:
        asyncio.run(_service(client).recalculate(["rice"]))

    assert excinfo.value.status_code == 500
    assert "Expecting value" in excinfo.value.details


def test_upstream_failure_is_internal_error() -> None:
    client = FakeCompletionClient(error=RuntimeError("429 Rate limit reached"))

    with pytest.raises(UnknownError) as excinfo:
        asyncio.run(_service(client).recalculate(["rice"]))

    assert excinfo.value.status_code == 500
    assert excinfo.value.details == "429 Rate limit reached"
