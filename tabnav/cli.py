#!/usr/bin/env python3
"""Command-line front end for command-bar navigation.

Commands:
- classify: show what typed words resolve to (URL, search URL, engine search)
- place: show where a new tab would be inserted for a placement policy
- open: resolve the words and open the result in the desktop browser

Env:
- TABNAV_CONFIG_PATH: JSON config (tabopenpos, relatedopenpos, newtab,
  searchurls, searchengine) used when --config is not given.
- TABNAV_VERBOSE: same as --verbose.
"""

import asyncio
import json
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, List, NoReturn, Optional, Tuple

from tabnav.address.classify import classify
from tabnav.address.models import ClassifiedAddress, SearchEngine
from tabnav.config import load_cfg, merge_cfg
from tabnav.placement.planner import TabPlacementResult, plan
from tabnav.webext.host import Tab
from tabnav.webext.system import SystemBrowserHost
from tabnav.webext.tabs import NEWTAB_PAGE, WebExt


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on", "y"}


VERBOSE = _env_flag("TABNAV_VERBOSE", default=False)
COMMANDS = {"classify", "place", "open"}
USAGE = (
    "usage: tabnav [--verbose] classify [--config PATH] [--engines PATH] [--json] WORDS...\n"
    "       tabnav [--verbose] place --policy next|last|related [--related] --index N --id N "
    "--count N --version N [--json]\n"
    "       tabnav [--verbose] open [--config PATH] [--engines PATH] [--new-tab] [--related] [--dry-run] WORDS..."
)
_VALUE_FLAGS = {"--config", "--engines", "--policy", "--index", "--id", "--count", "--version"}
_BOOL_FLAGS = {"--json", "--related", "--new-tab", "--dry-run"}


def log(msg: str) -> None:
    if not VERBOSE:
        return
    ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    print(f"[tabnav] {ts} {msg}", file=sys.stderr)


def _usage_error(msg: str) -> NoReturn:
    print(f"{msg}\n{USAGE}", file=sys.stderr)
    raise SystemExit(2)


def parse_args(argv: List[str]) -> Dict:
    global VERBOSE
    args = list(argv[1:])
    while args and args[0] in ("-v", "--verbose"):
        VERBOSE = True
        args.pop(0)
    if not args or args[0] in ("-h", "--help"):
        print(USAGE, file=sys.stderr)
        raise SystemExit(0 if args else 2)

    command = args.pop(0)
    if command not in COMMANDS:
        _usage_error(f"unknown command: {command}")

    opts: Dict = {"command": command, "words": []}
    idx = 0
    while idx < len(args):
        arg = args[idx]
        if arg == "--":
            opts["words"].extend(args[idx + 1 :])
            break
        name, eq, inline = arg.partition("=")
        if name in _VALUE_FLAGS:
            if eq:
                value = inline
            else:
                if idx + 1 >= len(args):
                    _usage_error(f"{name} requires a value")
                idx += 1
                value = args[idx]
            opts[name[2:].replace("-", "_")] = value
        elif arg in _BOOL_FLAGS:
            opts[arg[2:].replace("-", "_")] = True
        elif arg in ("-v", "--verbose"):
            VERBOSE = True
        elif arg.startswith("--"):
            _usage_error(f"unknown option: {arg}")
        else:
            opts["words"].append(arg)
        idx += 1
    return opts


def load_engines(path: Optional[Path]) -> Tuple[List[SearchEngine], Dict[str, str]]:
    """Read ``[{"alias": ..., "name": ..., "url": ...}]``; ``url`` is an optional search-URL template."""
    if path is None:
        return [], {}
    raw = json.loads(path.read_text(encoding="utf-8"))
    engines: List[SearchEngine] = []
    urls: Dict[str, str] = {}
    for entry in raw:
        name = str(entry.get("name") or "").strip()
        if not name:
            continue
        engines.append(SearchEngine(alias=entry.get("alias") or None, name=name))
        if entry.get("url"):
            urls.setdefault(name, str(entry["url"]))
    return engines, urls


def resolve_cfg(opts: Dict) -> Dict:
    raw_path = opts.get("config") or os.environ.get("TABNAV_CONFIG_PATH")
    if not raw_path:
        return merge_cfg(None, None)
    path = Path(raw_path).expanduser()
    log(f"config: {path}")
    return merge_cfg(load_cfg(path), None)


def _int_opt(opts: Dict, key: str) -> int:
    value = opts.get(key)
    if value is None:
        _usage_error(f"--{key} is required")
    try:
        return int(value)
    except ValueError:
        _usage_error(f"--{key} must be an integer: {value}")


def describe(target: ClassifiedAddress) -> str:
    payload = target.as_dict()
    kind = payload.pop("kind")
    if not payload:
        return kind
    if "href" in payload:
        return f"{kind}\t{payload['href']}"
    if "engine" in payload:
        return f"{kind}\t{payload['engine']}\t{payload['query']}"
    return f"{kind}\t{payload['query']}"


def describe_placement(result: TabPlacementResult) -> str:
    options = result.as_create_options()
    if not options:
        return "(browser default)"
    return " ".join(f"{key}={value}" for key, value in options.items())


def cmd_classify(opts: Dict) -> int:
    cfg = resolve_cfg(opts)
    engines, _urls = load_engines(Path(opts["engines"]).expanduser() if opts.get("engines") else None)
    target = classify(" ".join(opts["words"]), cfg, engines)
    log(f"classified as {target.kind}")
    if opts.get("json"):
        print(json.dumps(target.as_dict(), ensure_ascii=False))
    else:
        print(describe(target))
    return 0


def cmd_place(opts: Dict) -> int:
    policy = opts.get("policy")
    if not policy:
        _usage_error("--policy is required")
    current = Tab(id=_int_opt(opts, "id"), index=_int_opt(opts, "index"))
    result = plan(
        policy,
        bool(opts.get("related")),
        current,
        _int_opt(opts, "count"),
        _int_opt(opts, "version"),
    )
    log(f"placement: policy={policy} related={bool(opts.get('related'))} -> {result}")
    if opts.get("json"):
        print(json.dumps(result.as_create_options()))
    else:
        print(describe_placement(result))
    return 0


async def _open(webext: WebExt, words: List[str], new_tab: bool, related: bool) -> ClassifiedAddress:
    if not new_tab:
        return await webext.dispatch(words)
    tab = await webext.open_in_new_tab(NEWTAB_PAGE, related=related)
    return await webext.open_in_tab(tab, words)


def cmd_open(opts: Dict) -> int:
    cfg = resolve_cfg(opts)
    engines, engine_urls = load_engines(Path(opts["engines"]).expanduser() if opts.get("engines") else None)
    searchurls = cfg.get("searchurls") or {}
    for engine in engines:
        # Engines listed without a url borrow the search URL of a matching alias.
        fallback = searchurls.get(engine.name.lower()) or searchurls.get(engine.alias or "")
        if fallback:
            engine_urls.setdefault(engine.name, fallback)
    host = SystemBrowserHost(
        engines=engines,
        engine_urls=engine_urls,
        default_search_url=searchurls.get(cfg.get("searchengine") or "", ""),
        dry_run=bool(opts.get("dry_run")),
    )
    webext = WebExt(host, cfg)
    target = asyncio.run(_open(webext, opts["words"], bool(opts.get("new_tab")), bool(opts.get("related"))))
    log(f"opened {target.kind}: {', '.join(host.opened)}")
    if host.dry_run:
        for url in host.opened:
            print(url)
    return 0


def main(argv: List[str]) -> int:
    opts = parse_args(argv)
    try:
        if opts["command"] == "classify":
            return cmd_classify(opts)
        if opts["command"] == "place":
            return cmd_place(opts)
        return cmd_open(opts)
    except FileNotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return 2
    except (LookupError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


def run() -> None:
    raise SystemExit(main(sys.argv))


if __name__ == "__main__":
    run()
