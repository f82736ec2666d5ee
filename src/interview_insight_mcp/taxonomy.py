"""Fixed taxonomy tables: feature checklist, Kano evaluation and technician archetypes.

Everything here is static data plus one pure lookup (``kano_category``).
The checklist order is the order of the reconciled satisfaction list.
"""

from __future__ import annotations

from typing import NamedTuple

from .types import KanoCategory, KanoFeeling

FEELINGS: tuple[KanoFeeling, ...] = ("Like", "Expect", "Neutral", "Tolerate", "Dislike")


class Feature(NamedTuple):
    """A checklist feature with its stable key and bilingual label."""

    key: str
    en: str
    th: str


FEATURE_CHECKLIST: tuple[Feature, ...] = (
    Feature("easy_extrusion", "Easy to extrude from the cartridge", "ยิงง่าย บีบออกลื่น"),
    Feature("fast_curing", "Fast curing / short drying time", "แห้งเร็ว"),
    Feature("strong_adhesion", "Strong adhesion to the substrate", "ยึดเกาะแน่น"),
    Feature("flexibility", "Stays flexible after curing", "ยืดหยุ่นหลังแห้ง"),
    Feature("paintable", "Can be painted over", "ทาสีทับได้"),
    Feature("low_odor", "Low odor / low VOC", "กลิ่นไม่ฉุน"),
    Feature("non_yellowing", "Does not turn yellow over time", "ไม่เหลือง"),
    Feature("weather_resistance", "Resists sun, rain and UV", "ทนแดดทนฝน"),
    Feature("waterproof", "Fully waterproof seal", "กันน้ำได้สนิท"),
    Feature("anti_mold", "Anti-mold / anti-fungal", "กันเชื้อรา"),
    Feature("smooth_finish", "Smooth, neat bead finish", "เก็บงานเนียน เส้นสวย"),
    Feature("no_shrinkage", "No shrinkage or cracking", "ไม่หดตัว ไม่แตกร้าว"),
    Feature("long_durability", "Long service life", "ทนทานใช้งานได้นาน"),
    Feature("glass_compatible", "Safe on glass and aluminum (no staining)", "ใช้กับกระจกและอลูมิเนียมได้ ไม่กัดผิว"),
    Feature("multi_surface", "Works on many surfaces (all-in-one)", "ใช้ได้หลายพื้นผิว หลอดเดียวจบ"),
    Feature("easy_cleanup", "Easy to clean up before cure", "เช็ดทำความสะอาดง่าย"),
    Feature("value_for_money", "Good value for the price", "ราคาคุ้มค่า"),
    Feature("color_options", "Available in several colors", "มีให้เลือกหลายสี"),
)

FEATURE_KEYS: tuple[str, ...] = tuple(f.key for f in FEATURE_CHECKLIST)

# Standard Kano evaluation table: rows are the functional answer,
# columns the dysfunctional answer, both in FEELINGS order.
_KANO_TABLE: dict[KanoFeeling, tuple[KanoCategory, ...]] = {
    "Like":     ("Q", "A", "A", "A", "O"),
    "Expect":   ("R", "I", "I", "I", "M"),
    "Neutral":  ("R", "I", "I", "I", "M"),
    "Tolerate": ("R", "I", "I", "I", "M"),
    "Dislike":  ("R", "R", "R", "R", "Q"),
}

KANO_CATEGORIES: dict[KanoCategory, str] = {
    "A": "Attractive",
    "O": "One-dimensional (performance)",
    "M": "Must-be",
    "I": "Indifferent",
    "R": "Reverse",
    "Q": "Questionable",
}


def normalize_feeling(value: object) -> KanoFeeling:
    """Map a feeling answer onto the 5-point scale; unrecognized values read as Neutral."""
    if isinstance(value, str):
        text = value.strip().lower()
        for feeling in FEELINGS:
            if feeling.lower() == text:
                return feeling
    return "Neutral"


def kano_category(functional: object, dysfunctional: object) -> KanoCategory:
    """Derive the Kano category code for a (functional, dysfunctional) pair."""
    row = _KANO_TABLE[normalize_feeling(functional)]
    return row[FEELINGS.index(normalize_feeling(dysfunctional))]


NEUTRAL_CATEGORY: KanoCategory = kano_category("Neutral", "Neutral")


class TechnicianType(NamedTuple):
    """One of the six professional archetypes an interviewee is classified into."""

    th: str
    en: str
    focus: str
    keywords: tuple[str, ...]


TECHNICIAN_TYPES: tuple[TechnicianType, ...] = (
    TechnicianType(
        "ช่างรับเหมาก่อสร้าง",
        "Construction Contractor",
        "Structure, joints, durability, standard spec",
        ("ไม่แตก", "ไม่พัง", "ไม่แก้งาน", "ความทนทาน"),
    ),
    TechnicianType(
        "ช่างประตู–หน้าต่าง / อลูมิเนียม",
        "Door/Window/Aluminum",
        "Frames, glass, esthetics, easy extrusion",
        ("งานสวย", "ยิงลื่น", "เส้นสวย", "ไม่เหลือง"),
    ),
    TechnicianType(
        "ช่างกระจก",
        "Glass Technician",
        "Glass rooms, facade, chemical compatibility",
        ("เข้ากับกระจกได้", "ไม่กัด", "ไม่ Stain", "Neutral"),
    ),
    TechnicianType(
        "ช่างตกแต่งภายใน / บิวท์อิน",
        "Interior/Built-in",
        "Finishing, paintable, low odor",
        ("ทาสีทับได้", "เนียน", "Low VOC", "กลิ่นไม่ฉุน"),
    ),
    TechnicianType(
        "ช่างซ่อมบำรุง / ช่างอเนกประสงค์",
        "Maintenance/Handyman",
        "Quick fix, versatile, all-in-one",
        ("หลอดเดียวจบ", "ใช้งานง่าย", "อุดโป๊ว"),
    ),
    TechnicianType(
        "ช่างเฉพาะทาง (หลังคา / สุขภัณฑ์)",
        "Specialist - Roof/Sanitary",
        "Extreme durability, weather resistance",
        ("ทนแดด", "ทนน้ำ", "ทนสภาวะรุนแรง"),
    ),
)

SENSORY_ATTRIBUTES: tuple[str, ...] = (
    "hard_soft",
    "smooth_rough",
    "matte_glossy",
    "reflective",
    "cold_warm",
    "elasticity",
    "opacity",
    "tough_ductile",
    "strong_weak",
    "light_heavy",
)

SENSORY_SCORE_RANGE = (-2.0, 2.0)
CONFIDENCE_RANGE = (1.0, 100.0)
