# src/pallet_optimizer/containers.py
from __future__ import annotations

from pallet_optimizer.models import Container, PalletTemplate

# Internal usable dims (cm) and max payload (kg) for common ISO containers.
CONTAINER_PRESETS: dict[str, Container] = {
    "20":   Container(length=589.8,  width=235.2, height=239.5, max_weight=28200),
    "20HC": Container(length=589.1,  width=233.0, height=270.0, max_weight=28200),
    "40":   Container(length=1203.2, width=235.2, height=239.5, max_weight=26700),
    "40HC": Container(length=1203.2, width=235.0, height=270.0, max_weight=26500),
    "45HC": Container(length=1355.6, width=235.2, height=269.8, max_weight=27700),
}

DEFAULT_PALLET = PalletTemplate(length=120, width=100, height=15, weight=20, max_weight=1000)

PALLET_PRESETS: dict[str, PalletTemplate] = {
    "DEFAULT": DEFAULT_PALLET,
    "EUR":  PalletTemplate(length=120, width=80, height=14.4, weight=25, max_weight=1500),
    "EUR2": PalletTemplate(length=120, width=100, height=14.4, weight=30, max_weight=1250),
    # GMA pallet, specified the way US suppliers quote it
    "US":   PalletTemplate(length=48, width=40, height=5.75, unit="in",
                           weight=48, max_weight=2500, weight_unit="lb"),
}


def _lookup(presets: dict, preset: str, kind: str):
    key = preset.strip().upper()
    if key not in presets:
        raise ValueError(f"Unknown {kind} preset '{preset}'. Valid: {sorted(presets.keys())}")
    return presets[key]


def get_container(preset: str) -> Container:
    return _lookup(CONTAINER_PRESETS, preset, "container")


def get_pallet(preset: str) -> PalletTemplate:
    return _lookup(PALLET_PRESETS, preset, "pallet")
