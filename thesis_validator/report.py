from __future__ import annotations
from collections import OrderedDict
from typing import Any, Dict, List
import json


def write_json(path: str, payload: Dict[str, Any]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)


def write_txt(path: str, payload: Dict[str, Any]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(render_txt(payload))


def render_txt(payload: Dict[str, Any]) -> str:
    lines: List[str] = []
    lines.append(f"Validation Report: {payload.get('file_name')} ({payload.get('validated_at')})")
    lines.append("")
    lines.append(f"- Profile:  {payload.get('config_used')}")
    lines.append(f"- Valid:    {payload.get('is_valid')}")
    lines.append(f"- Errors:   {payload.get('total_errors')}")
    lines.append(f"- Warnings: {payload.get('total_warnings')}")
    lines.append("")

    headings = payload.get("headings", []) or []
    if headings:
        lines.append("Outline")
        for h in headings:
            lines.append(f"{'  ' * (h['level'] - 1)}- {h['text']}")
        lines.append("")

    by_rule: "OrderedDict[str, List[Dict[str, Any]]]" = OrderedDict()
    for r in payload.get("results", []) or []:
        by_rule.setdefault(r["rule_name"], []).append(r)
    for rule_name, results in by_rule.items():
        lines.append(f"{rule_name} ({len(results)})")
        for r in results[:60]:
            loc = r["location"]
            where = loc["description"]
            if loc.get("section"):
                where += f" in \"{loc['section']}\""
            lines.append(f"- [{r['severity'].upper()}] {where}: {r['message']}")
        if len(results) > 60:
            lines.append(f"... plus {len(results) - 60} more.")
        lines.append("")
    return "\n".join(lines)
