"""Interview analysis prompt and schema assembly.

INTERVIEW_ANALYSIS — sent with the recording on every request.
    Variables: {feature_count}, {feature_list}, {technician_count},
               {technician_types}.
All are rendered from the tables in ``taxonomy.py`` by ``build_instruction()``.
``analysis_schema()`` returns the JSON schema derived from ``InterviewAnalysis``.
"""

from __future__ import annotations

import copy
from functools import lru_cache

from ..models.interview import InterviewAnalysis
from ..taxonomy import FEATURE_CHECKLIST, TECHNICIAN_TYPES

INTERVIEW_ANALYSIS = """\
You are an **Expert R&D Sensory & Marketing Analyst**.
Extract structured data from this product-testing interview (chemical / sealant industry).

**LANGUAGE RULE:**
1. The values of 'summary', 'decisionReasoning', 'note', 'technical_analysis', \
'match_reason' and 'persona_profile' MUST be written in **Thai (ภาษาไทย)**.
2. If the interviewee speaks English, translate the insights into Thai.

---------------------------------------------------------
**TASK 1: KANO SATISFACTION ANALYSIS**
Rate the interviewee's satisfaction for ALL {feature_count} features below. For each feature give:
1. **functional (เมื่อมี):** how they feel if the product HAS the feature.
2. **dysfunctional (เมื่อไม่มี):** how they feel if the product LACKS the feature.
Both answers use exactly one of: Like, Expect, Neutral, Tolerate, Dislike.
Use the feature key as 'featureKey'.

**FEATURES:**
{feature_list}

If a feature is never mentioned, judge from their persona (a professional usually \
EXPECTS durability) or answer Neutral / Neutral with the note "ไม่ได้พูดถึง".

---------------------------------------------------------
**TASK 2: SENSORY BLIND TEST**
The interviewee tests a series of anonymous samples, typically 8 to 9. Report EVERY \
sample; do not stop early. Listen for cues such as "ตัวที่ 1", "เบอร์ 2", "ถัดไป", "อันสุดท้าย".
For each sample give:
- **sampleId:** e.g. "Sample 1".
- **scores:** all ten sensory scores, each between -2 and +2.
- **technical_analysis:** the material property implied by their feedback (Thai).

---------------------------------------------------------
**TASK 3: MARKETING STRATEGY & HABITS**
- **target_audience:** who the product suits best.
- **unique_selling_point:** the ONE thing that would make them buy.
- **marketing_hooks:** catchy phrases for ads.
- **marketing_channels:** where they would buy it.
- **pricing_perception:** how they judge the price.
- **pain_point_solution:** their biggest frustrations with current products and how to answer them.

---------------------------------------------------------
**TASK 4: BRAND, EXPERT & SEALANT ANALYSIS**
- **persona_profile:** a short Thai title (e.g. "ช่างฝีมือผู้หลงใหลความสมบูรณ์แบบ").
- **sealant_personality:** how they behave with sealant and what they prefer technically, based on quotes.
- **professional_lifestyle:** their general work and life style.
- **unspoken_needs:** deep needs they did not state outright.
- **rd_roadmap_suggestions** and **critical_quotes**.
- **qualitative.brands:** every brand they mention, with sentiment and switching barrier.

---------------------------------------------------------
**TASK 5: TECHNICIAN CLASSIFICATION**
Classify the interviewee into EXACTLY ONE of these {technician_count} types:

{technician_types}

Return the Thai name of the type as 'type', a confidence_score from 1 to 100, \
and the keywords they actually said that match the type as 'primary_keywords'.
"""


def format_feature_list() -> str:
    """Render the checklist as ``- "key": English (Thai)`` lines."""
    return "\n".join(f'- "{f.key}": {f.en} ({f.th})' for f in FEATURE_CHECKLIST)


def format_technician_types() -> str:
    blocks = []
    for i, t in enumerate(TECHNICIAN_TYPES, start=1):
        blocks.append(
            f"{i}. **{t.th} ({t.en})**\n"
            f"   - Focus: {t.focus}.\n"
            f"   - Keywords: {', '.join(t.keywords)}."
        )
    return "\n\n".join(blocks)


@lru_cache(maxsize=1)
def build_instruction() -> str:
    """Return the analysis instruction; identical for every interview."""
    return INTERVIEW_ANALYSIS.format(
        feature_count=len(FEATURE_CHECKLIST),
        feature_list=format_feature_list(),
        technician_count=len(TECHNICIAN_TYPES),
        technician_types=format_technician_types(),
    )


@lru_cache(maxsize=1)
def _schema() -> dict:
    return InterviewAnalysis.model_json_schema()


def analysis_schema() -> dict:
    """Return the structured-output JSON schema; identical for every interview.

    A deep copy is returned so callers cannot mutate the shared schema.
    """
    return copy.deepcopy(_schema())
