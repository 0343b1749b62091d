# src/pm_tracker/machines/defaults.py

from __future__ import annotations

from .models import Machine, new_machine

# Never hand these out directly: gateway.load_machines deep-copies them.
DEFAULT_MACHINES: dict[str, Machine] = {
    "machine_mustang": {
        "id": "machine_mustang",
        "name": "Mustang",
        "tasks": [
            {"id": "m_1", "name": "Check and Fill All Oil Lubricators", "freq": "1w", "freqLabel": "1 Week"},
            {"id": "m_5", "name": "Check Color of Diffusion Pump Oil", "freq": "1m", "freqLabel": "1 Month"},
            {"id": "m_7", "name": "Clean Electrical Control Cabinet Filter", "freq": "2mo", "freqLabel": "2 Months"},
            {"id": "m_10", "name": "Clean and Calibrate Chamber Gauge", "freq": "3mo", "freqLabel": "3 Months"},
            {"id": "m_14", "name": "Replace Door Seal", "freq": "6mo", "freqLabel": "6 Months"},
            {"id": "m_17", "name": "Change Demist Filters", "freq": "1y", "freqLabel": "1 Year"},
        ],
        "state": {},
        "notes": {},
    },
    "machine_vti4": new_machine("machine_vti4", "VTI 4"),
}

DEPRECATED_MACHINE_ID = "machine_antihaze"
REQUIRED_MACHINE_ID = "machine_vti4"
REQUIRED_MACHINE_NAME = "VTI 4"
