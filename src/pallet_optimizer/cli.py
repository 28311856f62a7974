from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Optional

from pallet_optimizer.config import configure_logging
from pallet_optimizer.engine import optimize, prepare_summary, validate_products
from pallet_optimizer.io.schemas import OptimizeRequestSchema
from pallet_optimizer.models import OptimizationResult, OptimizationSummary


def load_input(path: Path) -> OptimizeRequestSchema:
    return OptimizeRequestSchema.model_validate_json(path.read_text(encoding="utf-8"))


def write_plan(data: dict[str, Any], output_path: str) -> None:
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, sort_keys=True)


def format_summary(summary: OptimizationSummary) -> str:
    weight_line = (
        f"Weight Fill: {summary.weight_utilization:.2f}%"
        if summary.weight_utilization is not None
        else "Weight Fill: N/A"
    )
    status = "✅ Optimization Complete" if summary.success else "❌ Optimization Failed"
    return "\n".join(
        [
            status,
            f"Message: {summary.message or ''}",
            f"Volume Fill: {summary.utilization:.2f}%",
            weight_line,
            f"Pallets: {summary.total_pallets}",
            f"Units Placed: {summary.total_products}",
            f"Units Remaining: {summary.remaining_products}",
        ]
    )


def run(args: argparse.Namespace) -> dict[str, Any]:
    if args.mode == "summary":
        result = OptimizationResult.model_validate_json(Path(args.input).read_text(encoding="utf-8"))
        summary = prepare_summary(result)
        print(format_summary(summary))
        return summary.model_dump(mode="json")

    request = load_input(Path(args.input))

    if args.mode == "validate":
        verdict = validate_products(request.products)
        if verdict.valid:
            print("✅ All products are valid")
        else:
            print("❌ Invalid products:", ", ".join(verdict.invalid_products))
        return verdict.model_dump(mode="json")

    result = optimize(
        request.products,
        request.resolve_container(),
        request.resolve_pallet(),
        message=request.message,
    )
    print(format_summary(prepare_summary(result)))
    for remaining in result.remaining_products:
        print(f"  not placed: {remaining.product.name or remaining.product.id} x {remaining.quantity}")
    return result.model_dump(mode="json")


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Pallet Optimizer CLI")
    parser.add_argument("--input", required=True, help="Input shipment JSON file (or result JSON for summary mode)")
    parser.add_argument("--output", help="Output JSON file")
    parser.add_argument(
        "--mode",
        choices=["optimize", "validate", "summary"],
        default="optimize",
        help="optimize = plan pallets, validate = check products only, summary = condense a saved result",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default from PALLET_OPTIMIZER_LOG_LEVEL)")

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    output = run(args)
    if args.output:
        write_plan(output, args.output)
        print(f"✅ Output written to {args.output}")


if __name__ == "__main__":
    main()
