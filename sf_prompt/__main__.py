"""CLI for sf-prompt.

Usage:
    sf-prompt                     Start the AgentField node (default)
    sf-prompt serve               Start the AgentField node
    sf-prompt render [OPTIONS]    Render a prompt to stdout or a file
    sf-prompt options PERSONA     Show selectable work products and artifacts
    sf-prompt reset               Forget the saved request

Render options:
    --persona NAME                Business Analyst | Architect | Developer
    --artifact TYPE               LWC | Apex | TestClass | Flow | Object (repeatable)
    --work-product TYPE           Story | Design | Build
    --org-mode MODE               Greenfield | ExistingOrg
    --from FILE                   Start from a JSON request file
    --resume                      Start from the last saved request
    --out DIR                     Write the prompt to DIR instead of stdout
    --no-save                     Do not remember this request
"""

from __future__ import annotations

import argparse
import datetime
import json
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

from pydantic import ValidationError

from sf_prompt.capabilities import allowed_artifacts, allowed_work_products, normalize_request
from sf_prompt.config import state_path_from_env
from sf_prompt.prompts.assembler import assemble, prompt_meta
from sf_prompt.schemas import ArtifactType, OrgMode, OutputStyle, Persona, RequestDescriptor, WorkProductType
from sf_prompt.storage import DescriptorStore, write_export

logger = logging.getLogger(__name__)

# argparse dest -> RequestDescriptor field
_TEXT_FLAGS: dict[str, str] = {
    "persona": "persona",
    "work_product": "work_product",
    "org_mode": "org_mode",
    "goal": "goal",
    "objects": "objects",
    "users": "users",
    "requirements": "requirements",
    "constraints": "constraints",
    "org_details": "org_details",
    "integration": "integration",
    "existing_components": "existing_components",
    "known_integrations": "known_integrations",
    "org_complexity": "org_complexity",
    "output_style": "output_style",
    "date": "date",
}


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="sf-prompt",
        description="sf-prompt: rule-based Salesforce prompt composer",
    )
    parser.add_argument(
        "--state",
        default=None,
        help="Path of the saved-request file (default: $SF_PROMPT_STATE or ~/.sf_prompt/last_request.json)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("serve", help="Run the AgentField node")
    subparsers.add_parser("reset", help="Forget the saved request")

    options_parser = subparsers.add_parser(
        "options",
        help="Show the work products and artifacts a persona may select",
    )
    options_parser.add_argument("persona", help="Persona name, e.g. 'Business Analyst'")

    render = subparsers.add_parser("render", help="Render a prompt document")
    render.add_argument("--from", dest="from_file", default=None, help="JSON request file to start from")
    render.add_argument("--resume", action="store_true", help="Start from the last saved request")
    render.add_argument(
        "--persona",
        default=None,
        help=f"One of: {', '.join(p.value for p in Persona)}",
    )
    render.add_argument(
        "--artifact",
        "-a",
        dest="artifacts",
        action="append",
        default=None,
        help=f"Artifact type, repeatable. One of: {', '.join(a.value for a in ArtifactType)}",
    )
    render.add_argument(
        "--work-product",
        "-w",
        default=None,
        help=f"One of: {', '.join(w.value for w in WorkProductType)}",
    )
    render.add_argument("--org-mode", choices=[m.value for m in OrgMode], default=None)
    render.add_argument("--output-style", choices=[s.value for s in OutputStyle], default=None)
    render.add_argument("--goal", default=None)
    render.add_argument("--objects", default=None, help="Primary object(s)")
    render.add_argument("--users", default=None, help="Users/personas")
    render.add_argument("--requirements", default=None, help="Line-delimited requirements")
    render.add_argument("--constraints", default=None, help="Line-delimited custom constraints")
    render.add_argument("--org-details", default=None)
    render.add_argument("--integration", default=None, help="Data / integration notes")
    render.add_argument("--existing-components", default=None)
    render.add_argument("--known-integrations", default=None)
    render.add_argument("--org-complexity", default=None)
    render.add_argument("--date", default=None, help="Date stamp for the Context section")
    render.add_argument("--today", action="store_true", help="Stamp the Context section with today's date")
    render.add_argument("--out", "-o", default=None, help="Directory to write the prompt file to")
    render.add_argument("--meta", action="store_true", help="Print the one-line summary to stderr")
    render.add_argument("--no-save", action="store_true", help="Do not remember this request")

    return parser.parse_args(argv)


def _load_request_file(path: str) -> dict[str, Any]:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object")
    return data


def _build_descriptor(args: argparse.Namespace, store: DescriptorStore) -> RequestDescriptor:
    """Layer the CLI flags over the starting request (file, saved, or defaults)."""
    base: dict[str, Any] = {}
    if args.from_file:
        base = RequestDescriptor.model_validate(_load_request_file(args.from_file)).model_dump()
    elif args.resume:
        saved = store.load()
        if saved is not None:
            base = saved.model_dump()

    overrides: dict[str, Any] = {
        field_name: getattr(args, dest)
        for dest, field_name in _TEXT_FLAGS.items()
        if getattr(args, dest) is not None
    }
    if args.artifacts:
        overrides["artifacts"] = args.artifacts
    if args.today:
        overrides["date"] = datetime.date.today().isoformat()

    return normalize_request({**base, **overrides})


def _render(args: argparse.Namespace, store: DescriptorStore) -> int:
    try:
        descriptor = _build_descriptor(args, store)
    except (OSError, ValueError, ValidationError) as e:
        print(f"sf-prompt: cannot read request: {e}", file=sys.stderr)
        return 2

    if args.out:
        try:
            path = write_export(descriptor, args.out)
        except OSError as e:
            print(f"sf-prompt: cannot write prompt: {e}", file=sys.stderr)
            return 2
        print(str(path))
    else:
        sys.stdout.write(assemble(descriptor))

    if args.meta:
        print(prompt_meta(descriptor), file=sys.stderr)

    if not args.no_save:
        store.save(descriptor)
    return 0


def _options(persona: str) -> int:
    print(f"Persona:        {persona}")
    print(f"Work products:  {', '.join(allowed_work_products(persona))}")
    print(f"Artifacts:      {', '.join(allowed_artifacts(persona))}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for CLI."""
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    state_path = Path(args.state).expanduser() if args.state else state_path_from_env()
    store = DescriptorStore(state_path)

    if args.command == "render":
        return _render(args, store)
    if args.command == "options":
        return _options(args.persona)
    if args.command == "reset":
        store.clear()
        return 0

    from sf_prompt.app import main as server_main

    server_main()
    return 0


if __name__ == "__main__":
    sys.exit(main())
