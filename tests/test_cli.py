from __future__ import annotations

import json

from pallet_optimizer.cli import format_summary, main
from pallet_optimizer.models import OptimizationSummary


def write_shipment(tmp_path, products=None):
    shipment = {
        "products": products
        if products is not None
        else [
            {
                "product": {
                    "id": "drum-1",
                    "name": "Drum",
                    "weight": 40,
                    "weight_unit": "lb",
                    "dimensions": {"length": 600, "width": 600, "height": 900, "unit": "mm"},
                },
                "quantity": 8,
            }
        ],
        "container_preset": "20",
        "pallet_preset": "US",
    }
    path = tmp_path / "shipment.json"
    path.write_text(json.dumps(shipment), encoding="utf-8")
    return path


def test_optimize_writes_plan(tmp_path, capsys) -> None:
    shipment = write_shipment(tmp_path)
    output = tmp_path / "out" / "plan.json"

    main(["--input", str(shipment), "--output", str(output)])

    plan = json.loads(output.read_text(encoding="utf-8"))
    assert plan["success"] is True
    assert sum(p["quantity"] for a in plan["pallet_arrangements"] for p in a["placements"]) == 8
    assert "✅ Optimization Complete" in capsys.readouterr().out


def test_summary_mode_reads_saved_result(tmp_path, capsys) -> None:
    shipment = write_shipment(tmp_path)
    plan = tmp_path / "plan.json"
    main(["--input", str(shipment), "--output", str(plan)])
    capsys.readouterr()

    summary_path = tmp_path / "summary.json"
    main(["--input", str(plan), "--mode", "summary", "--output", str(summary_path)])

    summary = json.loads(summary_path.read_text(encoding="utf-8"))
    assert summary["total_products"] == 8
    assert "Units Placed: 8" in capsys.readouterr().out


def test_validate_mode_lists_invalid_products(tmp_path, capsys) -> None:
    shipment = write_shipment(tmp_path, products=[{"product": {"id": "x", "name": "Loose Part"}, "quantity": 2}])

    main(["--input", str(shipment), "--mode", "validate"])

    assert "❌ Invalid products: Loose Part" in capsys.readouterr().out


def test_format_summary_without_weight_limit() -> None:
    text = format_summary(
        OptimizationSummary(
            success=False,
            utilization=0.0,
            total_pallets=0,
            total_products=0,
            remaining_products=0,
            message="No products to optimize",
        )
    )

    assert text.splitlines()[0] == "❌ Optimization Failed"
    assert "Weight Fill: N/A" in text
    assert "Message: No products to optimize" in text
