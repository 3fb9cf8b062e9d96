"""Route a transcript to exactly one inventory command.

Rules are evaluated in a fixed priority order and the first one that
applies wins:
    1. blank input                  -> failed item
    2. forced code mode             -> code item (fuzzy decoding)
    3. "dodaj marker ..."           -> marker
    4. "... ilosc <n> [unit]"       -> item with quantity
    5. "kod ..." in the first words -> code item
    6. anything else                -> plain item
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from spis.logging_config import get_logger, transcript_context
from spis.voice.models import (
    Ignored,
    Item,
    ParseStatus,
    Route,
    RoutedCommand,
    TranscriptionResult,
)
from spis.voice.parser.code_mode import CodeModeNormalizer
from spis.voice.parser.command_parser import (
    QUANTITY_TRIGGER_RE,
    VoiceCommandParser,
    parse_quantity_and_unit,
)
from spis.voice.parser.numbers import normalize_polish

logger = get_logger(__name__)

_TRIGGER_PUNCTUATION = ":,.;"


@dataclass(frozen=True)
class CodeTrigger:
    alias: str
    remainder: str


class CommandRouter:
    """Single entry point turning transcript text into a RoutedCommand."""

    def __init__(
        self,
        voice_parser: VoiceCommandParser | None = None,
        code_normalizer: CodeModeNormalizer | None = None,
        trigger_aliases: Iterable[str] | None = None,
        trigger_search_tokens: int | None = None,
    ):
        if trigger_aliases is None or trigger_search_tokens is None:
            from spis.voice.config_models import get_voice_config
            code_config = get_voice_config().code_mode
            if trigger_aliases is None:
                trigger_aliases = code_config.trigger_aliases
            if trigger_search_tokens is None:
                trigger_search_tokens = code_config.trigger_search_tokens

        self.voice_parser = voice_parser or VoiceCommandParser()
        self.code_normalizer = code_normalizer or CodeModeNormalizer()
        self.trigger_aliases = frozenset(a.lower() for a in trigger_aliases)
        self.folded_aliases = frozenset(normalize_polish(a) for a in self.trigger_aliases)
        self.trigger_search_tokens = trigger_search_tokens

    def route(self, raw_text: str, force_code_mode: bool = False) -> RoutedCommand:
        trimmed = raw_text.strip()
        with transcript_context(trimmed, force_code_mode):
            return self._route(trimmed, force_code_mode)

    def _route(self, trimmed: str, force_code_mode: bool) -> RoutedCommand:
        if not trimmed:
            return self._routed(
                Route.NONE,
                Item(name="", status=ParseStatus.FAIL, debug=("empty input",)),
                "Router: empty input",
            )

        if force_code_mode:
            return self._route_forced_code(trimmed)

        marker = self.voice_parser.parse_marker_command(trimmed)
        if marker is not None:
            return self._routed(Route.MARKER, marker, "Router: marker command")

        quantity = self.voice_parser.parse_quantity_command(trimmed)
        if quantity is not None:
            return self._routed(
                Route.QUANTITY,
                quantity,
                f"Router: quantity trigger ({quantity.status.value})",
            )

        trigger = self.detect_code_trigger(trimmed)
        if trigger is not None:
            return self._route_triggered_code(trigger)

        return self._routed(
            Route.NONE,
            self.voice_parser.parse(trimmed),
            "Router: no command trigger, plain item",
        )

    def detect_code_trigger(self, text: str) -> CodeTrigger | None:
        """Find a "kod" style alias among the first few words."""
        words = text.split()
        for index, word in enumerate(words[: self.trigger_search_tokens]):
            cleaned = word.lower().rstrip(_TRIGGER_PUNCTUATION)
            folded = normalize_polish(cleaned)
            if cleaned in self.trigger_aliases:
                alias = cleaned
            elif folded in self.folded_aliases:
                alias = folded
            else:
                continue
            remainder = " ".join(words[:index] + words[index + 1:])
            return CodeTrigger(alias=alias, remainder=remainder)
        return None

    def _route_forced_code(self, trimmed: str) -> RoutedCommand:
        code_source = trimmed
        quantity = None
        unit = None
        debug: list[str] = []

        match = QUANTITY_TRIGGER_RE.search(trimmed)
        if match is not None:
            code_source = trimmed[: match.start()].strip()
            parsed = parse_quantity_and_unit(trimmed[match.end():])
            quantity, unit = parsed.quantity, parsed.unit
            debug.extend(parsed.debug)

        result = self.code_normalizer.normalize(code_source, enable_fuzzy=True)
        final = result.normalized or code_source or trimmed
        if not result.normalized:
            debug.append("VoiceCommand: code mode produced nothing, kept raw text")
        debug.insert(0, f"VoiceCommand: forced code mode -> \"{final}\"")

        item = Item(
            name=final,
            quantity=quantity,
            unit=unit,
            status=ParseStatus.OK,
            debug=tuple(debug),
        )
        return self._routed(
            Route.CODE,
            item,
            "Router: forced code mode",
            forced=True,
            code_mode_raw=code_source,
            code_mode_normalized=result.normalized,
            code_mode_final=final,
            code_mode_tokens=result.tokens,
        )

    def _route_triggered_code(self, trigger: CodeTrigger) -> RoutedCommand:
        result = self.code_normalizer.normalize(trigger.remainder, enable_fuzzy=False)
        if result.normalized:
            debug = (f"VoiceCommand: code mode (alias='{trigger.alias}') -> \"{result.normalized}\"",)
        else:
            debug = (f"VoiceCommand: code mode (alias='{trigger.alias}') without code text",)

        item = Item(name=result.normalized, status=ParseStatus.OK, debug=debug)
        return self._routed(
            Route.CODE,
            item,
            f"Router: code trigger '{trigger.alias}'",
            alias=trigger.alias,
            code_mode_raw=trigger.remainder,
            code_mode_normalized=result.normalized,
            code_mode_final=result.normalized,
            code_mode_tokens=result.tokens,
        )

    @staticmethod
    def _routed(route: Route, result, trace: str, **fields) -> RoutedCommand:
        routed = RoutedCommand(route=route, result=result, trace=(trace,), **fields)
        logger.info(
            "command_routed",
            rule=trace,
            route=route.value,
            result=type(result).__name__,
            forced=routed.forced,
        )
        return routed


def route_transcription(
    router: CommandRouter,
    transcription: TranscriptionResult,
    force_code_mode: bool = False,
) -> RoutedCommand:
    """Route a recognizer result; partial hypotheses are ignored."""
    if not transcription.is_final:
        trace = "Router: partial transcription ignored"
        logger.info("transcription_ignored", source=transcription.source)
        return RoutedCommand(
            route=Route.NONE,
            result=Ignored(reason="partial transcription", debug=(trace,)),
            trace=(trace,),
        )
    return router.route(transcription.transcript, force_code_mode=force_code_mode)
