"""Built-in magic commands.

``%lsmagic``
    Lists the registered magic commands.
``%args``
    Echoes the parameters parsed from its input, to show how a line is
    interpreted.  A leading bare word is stored as ``name``.
``%config``
    Shows or updates session settings.
"""
from __future__ import annotations

import json
from collections.abc import MutableMapping
from typing import TYPE_CHECKING, Any

from magicline.execution import ExecutionResult
from magicline.magic.magic import Documentation, Magic
from magicline.parser.parser import decode_parameter

if TYPE_CHECKING:
    from magicline.channel.channel import Channel
    from magicline.magic.registry import MagicRegistry


class LsMagicMagic(Magic):
    """Lists every magic registered with a session."""

    def __init__(self, registry: "MagicRegistry") -> None:
        super().__init__(
            "lsmagic",
            Documentation(
                summary="Lists the available magic commands.",
                description="Prints the name and summary of every registered magic command.",
                examples=("%lsmagic",),
            ),
        )
        self._registry = registry

    def run(self, input_text: str, channel: "Channel") -> ExecutionResult:
        listing = [
            {"name": magic.name, "summary": magic.documentation.summary}
            for magic in self._registry
        ]
        width = max((len(entry["name"]) for entry in listing), default=0)
        for entry in listing:
            channel.stdout(f"{entry['name']:<{width}}  {entry['summary']}")
        return ExecutionResult.ok(listing)


class ArgsMagic(Magic):
    """Shows the parameter map a line of input parses to."""

    FIRST_PARAMETER_NAME = "name"

    def __init__(self) -> None:
        super().__init__(
            "args",
            Documentation(
                summary="Shows how magic-command arguments are parsed.",
                description=(
                    "Parses the input exactly as other magic commands do and prints "
                    "the resulting parameters with their JSON-encoded values. "
                    "A leading bare word is reported as the `name` parameter."
                ),
                examples=(
                    "%args Foo shots=100",
                    '%args label="two words" verbose',
                    '%args {"shots": 100}',
                ),
            ),
        )

    def run(self, input_text: str, channel: "Channel") -> ExecutionResult:
        parameters = self.parse_input_parameters(input_text, self.FIRST_PARAMETER_NAME)
        channel.stdout(json.dumps(parameters, indent=2, ensure_ascii=False))
        return ExecutionResult.ok(parameters)


class ConfigMagic(Magic):
    """Shows or updates session settings.

    With no input every setting is printed.  Otherwise the input is parsed
    as ``key=value`` pairs (or one JSON object) and each decoded value is
    stored under its key.
    """

    def __init__(self, settings: MutableMapping[str, Any]) -> None:
        super().__init__(
            "config",
            Documentation(
                summary="Shows or sets session configuration values.",
                description=(
                    "Without arguments, prints all configuration settings. With "
                    "`key=value` pairs or a JSON object, updates those settings."
                ),
                remarks="Values given as `key=value` are stored as strings; use JSON for numbers.",
                examples=(
                    "%config",
                    "%config output.format=table",
                    '%config {"simulator.shots": 1000}',
                ),
            ),
        )
        self._settings = settings

    def run(self, input_text: str, channel: "Channel") -> ExecutionResult:
        if input_text.strip():
            parameters = self.parse_input_parameters(input_text)
            if "" in parameters:
                raise ValueError("Configuration keys must not be empty.")
            for key in parameters:
                self._settings[key] = decode_parameter(parameters, key)

        for key in sorted(self._settings):
            value = json.dumps(self._settings[key], ensure_ascii=False)
            channel.stdout(f"{key} = {value}")
        return ExecutionResult.ok(dict(self._settings))
