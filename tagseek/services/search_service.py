"""Search Service for TagSeek - tool-calling loop over a symbol catalog.

The finder agent is given a fixed set of filter operations. Each turn the
model may call one of them; the service runs it against the full catalog,
folds the output into the session's accumulated result and shows the result
back to the model. The loop ends only when the model calls
``stop_searching``.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger

from tagseek.core.config.search_config import SearchConfig
from tagseek.core.exceptions import (
    SearchTurnLimitError,
    ToolArgumentParseError,
    UnknownOperationError,
)
from tagseek.core.models import SymbolCatalog
from tagseek.core.tokens import ProviderTokenizer, Tokenizer
from tagseek.interfaces.llm_provider import ChatMessage, LLMProvider, ToolCall
from tagseek.search.operations import (
    Effect,
    StopSearchingArgs,
    parse_arguments,
    tool_schemas,
)
from tagseek.services.prompts.finder import FINDER_SYSTEM_MESSAGE
from tagseek.services.slicing_service import max_slice

FUNCTION_NOT_FOUND_MESSAGE = "function not found"


@dataclass
class SearchSession:
    """Mutable state of one search run. Never shared between runs."""

    query: str
    messages: list[ChatMessage] = field(default_factory=list)
    result: SymbolCatalog = field(default_factory=SymbolCatalog)
    terminated: bool = False
    answer: list[Path] | None = None
    turns: int = 0


class SearchService:
    """Drives the finder agent until it emits the stop signal."""

    def __init__(
        self,
        llm_provider: LLMProvider,
        config: SearchConfig | None = None,
        tokenizer: Tokenizer | None = None,
        temperature: float = 0.0,
    ):
        """Initialize search service.

        Args:
            llm_provider: Model that plays the finder agent
            config: Turn ceiling and result budget
            tokenizer: Token counter for result budgeting (defaults to the
                provider's own estimate)
            temperature: Sampling temperature for every turn
        """
        self._llm = llm_provider
        self._config = config or SearchConfig()
        self._tokenizer = tokenizer or ProviderTokenizer(llm_provider)
        self._temperature = temperature
        self._tools = tool_schemas()

    def new_session(self, query: str) -> SearchSession:
        return SearchSession(
            query=query,
            messages=[
                ChatMessage.system(FINDER_SYSTEM_MESSAGE),
                ChatMessage.user(query),
            ],
        )

    async def search(
        self,
        query: str,
        catalog: SymbolCatalog,
        on_content: Callable[[str], None] | None = None,
    ) -> list[Path] | None:
        """Find the files matching ``query``.

        Args:
            query: Natural-language description of what to find
            catalog: Full catalog snapshot every operation is derived from
            on_content: Streams assistant text when given

        Returns:
            Paths reported by the agent, or None if it found no match

        Raises:
            SearchTurnLimitError: If the agent never stops within max_turns
        """
        session = await self.run(self.new_session(query), catalog, on_content)
        return session.answer

    async def run(
        self,
        session: SearchSession,
        catalog: SymbolCatalog,
        on_content: Callable[[str], None] | None = None,
    ) -> SearchSession:
        """Run turns until the session terminates."""
        logger.info(f"Starting search over {len(catalog)} tags: '{session.query}'")
        max_turns = self._config.max_turns

        while not session.terminated:
            if max_turns is not None and session.turns >= max_turns:
                logger.error(f"Search stopped after {max_turns} turns without an answer")
                raise SearchTurnLimitError(max_turns, session)
            await self.step(session, catalog, on_content)

        logger.info(f"Search finished after {session.turns} turns: {session.answer}")
        return session

    async def step(
        self,
        session: SearchSession,
        catalog: SymbolCatalog,
        on_content: Callable[[str], None] | None = None,
    ) -> None:
        """One request/response round trip plus dispatch of its tool calls."""
        response = await self._llm.chat(
            session.messages,
            tools=self._tools,
            temperature=self._temperature,
            on_content=on_content,
        )
        session.turns += 1
        session.messages.append(response.message)

        if not response.tool_calls:
            # Plain text is not a stop signal
            logger.debug(f"Turn {session.turns}: no function call")
            return

        for call in response.tool_calls:
            self.dispatch(session, catalog, call)
            if session.terminated:
                break

    def dispatch(
        self, session: SearchSession, catalog: SymbolCatalog, call: ToolCall
    ) -> None:
        """Execute one tool call and append its result turn.

        Unknown operations and invalid arguments become corrective turns so
        the agent can retry; they never end the session.
        """
        logger.debug(
            f"Function call received: {call.name} with arguments: {call.arguments}"
        )
        try:
            operation, args = parse_arguments(call.name, call.arguments)
        except UnknownOperationError:
            logger.debug(f"Function not found: {call.name}")
            session.messages.append(
                ChatMessage.tool_result(call.id, FUNCTION_NOT_FOUND_MESSAGE)
            )
            return
        except ToolArgumentParseError as e:
            logger.warning(f"{e}: {e.detail}")
            session.messages.append(ChatMessage.tool_result(call.id, str(e)))
            return

        if operation.effect is Effect.STOP:
            assert isinstance(args, StopSearchingArgs)
            session.answer = args.predicate_path
            session.terminated = True
            session.messages.append(
                ChatMessage.tool_result(call.id, "search stopped")
            )
            return

        assert operation.apply is not None
        logger.debug(f"Executing {operation.name} with args: {args!r}")
        derived = operation.apply(catalog, args)

        if operation.effect is Effect.EXTEND:
            session.result = session.result.union(derived)
        else:
            session.result = derived

        logger.debug(f"Result after {operation.name}: {len(session.result)} tags")
        session.messages.append(
            ChatMessage.tool_result(call.id, self.render_result(session.result))
        )

    def render_result(self, result: SymbolCatalog) -> str:
        """Show the accumulated result to the agent within the token budget."""
        shown, omitted = max_slice(
            result, self._tokenizer, self._config.result_max_tokens
        )
        message = f"search result: {shown.to_json()}"
        if omitted:
            message += (
                f"\n({len(omitted)} more results omitted; narrow the search "
                "to see them)"
            )
        return message
