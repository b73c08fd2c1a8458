from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

from .models import Failure, ListResult, Pending, Success


def render_text(result: ListResult, *, email_sent: bool = False) -> str:
    if isinstance(result, Pending):
        return "Researching products…"
    if isinstance(result, Failure):
        return f"Error: {result.message}"
    if not isinstance(result, Success):
        return ""

    lines = [result.title, result.intro, "✅ All products have REAL Amazon ASINs and working affiliate links!"]
    if email_sent:
        lines.append("📧 Results sent to your email")
    lines.append("")

    if not result.products:
        lines.append("No products returned.")
    for rank, p in enumerate(result.products, 1):
        lines.append(f"  {rank}. {p.title}")
        if p.image_url:
            lines.append(f"     {p.image_url}")
        lines.append(f"     {p.price} ⭐ {p.rating:g}/5")
        if p.description:
            lines.append(f"     {p.description}")
        lines.append(f"     🛒 View on Amazon: {p.affiliate_link}")

    lines.append("")
    lines.append(f"Generated: {result.generated_at} | Affiliate ID: {result.affiliate_id}")
    return "\n".join(lines)


def result_to_dict(result: ListResult) -> dict[str, Any]:
    data = asdict(result)
    if isinstance(result, Success):
        for rank, row in enumerate(data["products"], 1):
            row["rank"] = rank
    return data


def write_json(result: ListResult, path: str = "artifacts/top10_list.json") -> str:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(result_to_dict(result), indent=2, ensure_ascii=False))
    return str(out)
