"""Command line entry point: ``deepseek-providers`` / ``python -m deepseek_providers``.

Subcommands
-----------
- ``models [--json]``: list the model ids served by the configured host.
- ``chat --prompt TEXT [--system TEXT] [--model NAME] [--json]``: run one
  streamed completion and print the reply followed by token usage.

Configuration comes from the layered config (``DEEPSEEK_*`` variables,
``.env``, ``PROVIDERS_CONFIG_FILE``). Provider errors are printed to stderr as
``code: message`` and the command exits with status 1.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Callable, List, Optional

from .base.errors import ProviderError
from .base.models import Message
from .config.defaults import CLI_DEFAULT_SYSTEM_PROMPT
from .deepseek.client import DeepseekProvider

ProviderFactory = Callable[[Optional[str]], DeepseekProvider]


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level parser; performs no I/O."""
    p = argparse.ArgumentParser(prog="deepseek-providers", description="DeepSeek streaming completion adapter")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_models = sub.add_parser("models", help="List remote model ids")
    p_models.add_argument("--json", action="store_true")

    p_chat = sub.add_parser("chat", help="Run a single completion")
    p_chat.add_argument("--prompt", required=True)
    p_chat.add_argument("--system", default=CLI_DEFAULT_SYSTEM_PROMPT)
    p_chat.add_argument("--model", default=None)
    p_chat.add_argument("--json", action="store_true")
    return p


def cmd_models(args: argparse.Namespace, factory: ProviderFactory) -> int:
    ids = factory(None).fetch_supported_models()
    if args.json:
        print(json.dumps(ids))
    else:
        for model_id in ids:
            print(model_id)
    return 0


def cmd_chat(args: argparse.Namespace, factory: ProviderFactory) -> int:
    provider = factory(args.model)
    message, usage = provider.complete(args.system, [Message.user(args.prompt)])
    if args.json:
        out = {
            "content": message.text(),
            "reasoning": message.reasoning(),
            "tool_calls": [
                {"id": c.id, "name": c.name, "arguments": c.arguments, "error": c.error} for c in message.tool_calls
            ],
            "usage": usage.to_dict(),
        }
        print(json.dumps(out, ensure_ascii=False))
        return 0
    print(message.text())
    u = usage.usage
    print(f"[{usage.model}] tokens in={u.input_tokens} out={u.output_tokens} total={u.total_tokens}", file=sys.stderr)
    return 0


def main(argv: Optional[List[str]] = None, factory: Optional[ProviderFactory] = None) -> int:
    """Parse ``argv`` and run the selected subcommand; returns the exit status."""
    args = build_parser().parse_args(argv)
    make = factory or (lambda model: DeepseekProvider.from_env(model=model))
    handlers = {"models": cmd_models, "chat": cmd_chat}
    try:
        return handlers[args.cmd](args, make)
    except ProviderError as e:
        print(f"{e.code.value}: {e.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
