"""Tests for the tool-calling search loop, driven by a scripted fake model."""

import json
from pathlib import Path

import pytest

from tagseek.core.config import SearchConfig
from tagseek.core.exceptions import SearchTurnLimitError
from tagseek.interfaces.llm_provider import ChatMessage
from tagseek.search.operations import tool_schemas
from tagseek.services.prompts.finder import FINDER_SYSTEM_MESSAGE
from tagseek.services.search_service import FUNCTION_NOT_FOUND_MESSAGE, SearchService
from tests.fixtures.fake_providers import FakeLLMProvider, FixedCostTokenizer, tool_call


def make_service(llm, **config):
    return SearchService(llm, SearchConfig(**config), tokenizer=FixedCostTokenizer(1))


def tool_messages(session) -> list[ChatMessage]:
    return [m for m in session.messages if m.role == "tool"]


def shown_names(message: ChatMessage) -> list[str]:
    payload = message.content.removeprefix("search result: ").split("\n")[0]
    return [record["name"] for record in json.loads(payload)]


class TestSearchLoop:
    @pytest.mark.asyncio
    async def test_find_by_kind_extends_then_stop(self, sample_catalog):
        llm = FakeLLMProvider(
            script=[
                tool_call("find_by_name", {"name": "foo"}),
                tool_call("find_by_kind", {"kind": "struct"}),
                tool_call("stop_searching", {"predicate_path": ["src/bar.rs"]}),
            ]
        )
        service = make_service(llm)

        session = await service.run(service.new_session("where is bar?"), sample_catalog)

        assert session.terminated
        assert session.answer == [Path("src/bar.rs")]
        assert session.turns == 3
        # union, not replace: the find_by_name results survive
        assert [r.name for r in session.result] == ["Foo", "foo_helper", "bar"]

        replies = tool_messages(session)
        assert shown_names(replies[0]) == ["Foo", "foo_helper"]
        assert shown_names(replies[1]) == ["Foo", "foo_helper", "bar"]

    @pytest.mark.asyncio
    async def test_search_returns_answer(self, sample_catalog):
        llm = FakeLLMProvider(
            script=[tool_call("stop_searching", {"predicate_path": ["src/bar.rs"]})]
        )

        answer = await make_service(llm).search("where is bar?", sample_catalog)

        assert answer == [Path("src/bar.rs")]

    @pytest.mark.asyncio
    async def test_stop_without_match(self, sample_catalog):
        llm = FakeLLMProvider(script=[tool_call("stop_searching", {"predicate_path": None})])

        assert await make_service(llm).search("unicorns", sample_catalog) is None

    @pytest.mark.asyncio
    async def test_replacing_operation_discards_previous_result(self, sample_catalog):
        llm = FakeLLMProvider(
            script=[
                tool_call("find_by_kind", {"kind": "struct"}),
                tool_call("find_by_name", {"name": "foo"}),
                tool_call("stop_searching", {"predicate_path": ["src/foo.rs"]}),
            ]
        )
        service = make_service(llm)

        session = await service.run(service.new_session("foo"), sample_catalog)

        assert [r.name for r in session.result] == ["Foo", "foo_helper"]

    @pytest.mark.asyncio
    async def test_operations_derive_from_full_catalog(self, sample_catalog):
        llm = FakeLLMProvider(
            script=[
                tool_call("find_by_path", {"path": "src/foo.rs"}),
                tool_call("find_by_line_range", {"from": 45, "to": 70}),
                tool_call("stop_searching", {"predicate_path": ["src/bar.rs"]}),
            ]
        )
        service = make_service(llm)

        session = await service.run(service.new_session("late lines"), sample_catalog)

        # src/foo.rs has nothing past line 20; the range is applied to all tags
        assert [r.name for r in session.result] == ["bar", "remove the unwrap here"]

    @pytest.mark.asyncio
    async def test_first_request(self, sample_catalog):
        llm = FakeLLMProvider(script=[tool_call("stop_searching")])

        await make_service(llm).search("where is bar?", sample_catalog)

        first = llm.calls[0]
        assert [m.role for m in first["messages"]] == ["system", "user"]
        assert first["messages"][0].content == FINDER_SYSTEM_MESSAGE
        assert first["messages"][1].content == "where is bar?"
        assert first["tools"] == tool_schemas()
        assert first["temperature"] == 0.0


class TestRecovery:
    @pytest.mark.asyncio
    async def test_unknown_function(self, sample_catalog):
        llm = FakeLLMProvider(
            script=[
                tool_call("grep_everything", {"pattern": "bar"}, call_id="call_x"),
                tool_call("stop_searching"),
            ]
        )
        service = make_service(llm)

        session = await service.run(service.new_session("bar"), sample_catalog)

        reply = tool_messages(session)[0]
        assert reply.content == FUNCTION_NOT_FOUND_MESSAGE
        assert reply.tool_call_id == "call_x"
        assert session.turns == 2
        assert not session.result

    @pytest.mark.asyncio
    async def test_argument_parse_failure(self, sample_catalog):
        llm = FakeLLMProvider(
            script=[
                tool_call("find_by_name", {"name": "foo"}),
                tool_call("find_by_line_range", '{"from": "ten"}'),
                tool_call("stop_searching"),
            ]
        )
        service = make_service(llm)

        session = await service.run(service.new_session("foo"), sample_catalog)

        reply = tool_messages(session)[1]
        assert reply.content == "could not parse find_by_line_range arguments"
        # accumulated result untouched by the failed call
        assert [r.name for r in session.result] == ["Foo", "foo_helper"]

    @pytest.mark.asyncio
    async def test_plain_text_continues_the_loop(self, sample_catalog):
        llm = FakeLLMProvider(
            script=[
                "Let me look for bar first.",
                tool_call("stop_searching", {"predicate_path": ["src/bar.rs"]}),
            ]
        )
        streamed = []
        service = make_service(llm)

        session = await service.run(
            service.new_session("bar"), sample_catalog, on_content=streamed.append
        )

        assert session.turns == 2
        assert session.answer == [Path("src/bar.rs")]
        assert streamed == ["Let me look for bar first."]
        assert session.messages[2].content == "Let me look for bar first."

    @pytest.mark.asyncio
    async def test_turn_limit(self, sample_catalog):
        llm = FakeLLMProvider(responder=lambda messages: "still thinking")
        service = make_service(llm, max_turns=3)

        with pytest.raises(SearchTurnLimitError) as exc_info:
            await service.search("bar", sample_catalog)

        assert exc_info.value.max_turns == 3
        assert exc_info.value.session.turns == 3
        assert len(llm.calls) == 3

    @pytest.mark.asyncio
    async def test_calls_after_stop_are_ignored(self, sample_catalog):
        llm = FakeLLMProvider(
            script=[
                [
                    tool_call("stop_searching", {"predicate_path": ["src/foo.rs"]}),
                    tool_call("find_by_name", {"name": "bar"}),
                ]
            ]
        )
        service = make_service(llm)

        session = await service.run(service.new_session("foo"), sample_catalog)

        assert session.answer == [Path("src/foo.rs")]
        assert not session.result
        assert len(tool_messages(session)) == 1


class TestRenderResult:
    def test_large_results_are_truncated(self, sample_catalog):
        llm = FakeLLMProvider()
        service = SearchService(
            llm,
            SearchConfig(result_max_tokens=100),
            tokenizer=FixedCostTokenizer(40),
        )

        rendered = service.render_result(sample_catalog.retain_tags())

        assert shown_names(ChatMessage.assistant(rendered)) == ["Foo", "bar"]
        assert "2 more results omitted" in rendered

    def test_empty_result(self):
        service = make_service(FakeLLMProvider())
        assert service.render_result(service.new_session("x").result) == "search result: []"
