# homepro/domain/task_templates.py
from __future__ import annotations

# Built-in task templates, seeded as rows without an owner.
# (id, name, description, category, base_frequency, diy_difficulty, cost min, cost max, importance, season)
_ROWS = (
    ("hvac-filter", "Replace HVAC Filter",
     "Replace or clean your HVAC air filter to maintain air quality and system efficiency.",
     "HVAC", "MONTHLY", "easy", 10, 50, "high", "all"),
    ("hvac-inspection", "HVAC System Inspection",
     "Professional inspection of heating and cooling systems to ensure optimal performance.",
     "HVAC", "ANNUAL", "hard", 100, 300, "high", "all"),
    ("hvac-condenser", "Clean HVAC Condenser Unit",
     "Clean the outdoor condenser unit to remove debris and ensure proper airflow.",
     "HVAC", "QUARTERLY", "easy", 0, 0, "medium", "spring"),
    ("plumbing-leaks", "Check for Leaks",
     "Inspect all visible pipes, faucets, and fixtures for leaks or drips.",
     "PLUMBING", "MONTHLY", "easy", 0, 0, "high", "all"),
    ("water-heater-drain", "Drain Water Heater",
     "Drain sediment from water heater tank to maintain efficiency and extend lifespan.",
     "PLUMBING", "ANNUAL", "medium", 0, 150, "medium", "fall"),
    ("water-pressure", "Test Water Pressure",
     "Check water pressure throughout the home to ensure proper flow.",
     "PLUMBING", "QUARTERLY", "easy", 0, 0, "low", "all"),
    ("gutters", "Clean Gutters",
     "Remove leaves, debris, and check for proper drainage.",
     "EXTERIOR", "QUARTERLY", "medium", 100, 300, "high", "fall"),
    ("roof-inspection", "Inspect Roof",
     "Visual inspection of roof for damaged or missing shingles, leaks, or wear.",
     "EXTERIOR", "ANNUAL", "hard", 200, 500, "critical", "spring"),
    ("paint-touchups", "Paint Touch-ups",
     "Touch up exterior paint to protect against weather damage.",
     "EXTERIOR", "ANNUAL", "easy", 50, 200, "medium", "spring"),
    ("smoke-detector-test", "Test Smoke Detectors",
     "Test all smoke and carbon monoxide detectors to ensure they're working.",
     "SAFETY", "MONTHLY", "easy", 0, 20, "critical", "all"),
    ("smoke-detector-batteries", "Replace Smoke Detector Batteries",
     "Replace batteries in all smoke and CO detectors.",
     "SAFETY", "ANNUAL", "easy", 10, 30, "critical", "fall"),
    ("electrical-panel", "Electrical Panel Inspection",
     "Professional inspection of electrical panel for safety and capacity.",
     "ELECTRICAL", "ANNUAL", "hard", 150, 400, "high", "all"),
    ("fridge-coils", "Clean Refrigerator Coils",
     "Clean condenser coils on the back or bottom of refrigerator.",
     "APPLIANCE", "QUARTERLY", "easy", 0, 0, "medium", "all"),
    ("dryer-vent", "Clean Dryer Vent",
     "Remove lint from dryer vent and exhaust duct.",
     "APPLIANCE", "QUARTERLY", "medium", 0, 150, "high", "all"),
    ("foundation-inspection", "Foundation Inspection",
     "Inspect foundation for cracks, settling, or water damage.",
     "STRUCTURAL", "ANNUAL", "hard", 300, 800, "critical", "spring"),
    ("water-intrusion", "Check for Water Intrusion",
     "Inspect basement, crawl space, and around windows for water.",
     "STRUCTURAL", "QUARTERLY", "easy", 0, 0, "high", "all"),
    ("tree-trimming", "Trim Trees Near House",
     "Trim branches that are too close to the house or roof.",
     "LANDSCAPING", "ANNUAL", "medium", 100, 500, "medium", "fall"),
    ("sprinklers", "Check Sprinkler System",
     "Inspect and test irrigation system for leaks and proper operation.",
     "LANDSCAPING", "SEASONAL", "medium", 0, 200, "low", "spring"),
)

_FIELDS = (
    "id", "name", "description", "category", "base_frequency",
    "diy_difficulty", "cost_range_min", "cost_range_max", "importance", "season",
)

SYSTEM_TEMPLATES: tuple[dict, ...] = tuple(dict(zip(_FIELDS, row)) for row in _ROWS)
