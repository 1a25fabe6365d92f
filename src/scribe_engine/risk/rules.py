"""Risk rule and contraindication tables.

A ``RiskRule`` fires when every trigger it configures holds:

- ``required_patterns``: each pattern must appear in the content.
- ``condition_patterns``: at least ``min_condition_matches`` distinct
  patterns must appear in the content.
- ``medication_patterns``: some medication name must match one of these.
- ``co_medication_patterns``: some *other* medication must match one of
  these (drug-drug pairs).
- ``min_age``: the patient must be at least this old.
- ``min_medications``: the medication list must be at least this long.

Several rules may share a ``factor`` name; the analyzer merges them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Collection, Iterable, Optional

from scribe_engine.models import AlertSeverity, RiskCategory, RiskSeverity


@dataclass(frozen=True)
class RiskRule:
    rule_id: str
    factor: str
    category: RiskCategory
    severity: RiskSeverity
    description: str
    recommendations: tuple[str, ...] = ()
    required_patterns: tuple[str, ...] = ()
    condition_patterns: tuple[str, ...] = ()
    min_condition_matches: int = 1
    medication_patterns: tuple[str, ...] = ()
    co_medication_patterns: tuple[str, ...] = ()
    min_age: Optional[int] = None
    min_medications: Optional[int] = None
    enabled: bool = True

    @property
    def has_trigger(self) -> bool:
        return bool(
            self.required_patterns
            or self.condition_patterns
            or self.medication_patterns
            or self.min_age is not None
            or self.min_medications is not None
        )


def select_rules(
    rules: Iterable[RiskRule],
    *,
    categories: Optional[Collection[RiskCategory]] = None,
    enabled_only: bool = True,
) -> list[RiskRule]:
    """Rules in the given order, limited to ``categories`` when non-empty."""
    wanted = frozenset(categories) if categories else None
    return [
        r for r in rules
        if (r.enabled or not enabled_only) and (wanted is None or r.category in wanted)
    ]


_NSAIDS = r"\b(?:ibuprofen|diclofenac|naproxen|indomethacin|meloxicam|celecoxib|nsaid)"
_ANTIPLATELETS = r"\b(?:aspirin|clopidogrel)"
_ACE_INHIBITORS = r"\b(?:enalapril|lisinopril|captopril|perindopril|ramipril)"
_CV_INDICATORS = (
    r"\bhypertension|\bhigh blood pressure",
    r"\bdiabet",
    r"\bsmok",
    r"\bcholesterol|\bhyperlipid|\bdyslipid",
    r"\bheart disease|\bischa?emic heart|\bmyocardial infarction|\bheart attack",
)

RISK_RULES: tuple[RiskRule, ...] = (
    RiskRule(
        rule_id="age.advanced",
        factor="Advanced age",
        category=RiskCategory.OTHER,
        severity=RiskSeverity.MEDIUM,
        description="Increased risk for multiple conditions and medication complications",
        recommendations=(
            "Consider geriatric dosing adjustments",
            "Monitor for polypharmacy interactions",
            "Assess cognitive function and fall risk",
        ),
        min_age=66,
    ),
    RiskRule(
        rule_id="cv.multiple",
        factor="High cardiovascular risk",
        category=RiskCategory.CARDIOVASCULAR,
        severity=RiskSeverity.MEDIUM,
        description="Multiple cardiovascular risk factors present",
        recommendations=(
            "Monitor blood pressure and lipids regularly",
            "Implement lifestyle modifications",
        ),
        condition_patterns=_CV_INDICATORS,
        min_condition_matches=2,
    ),
    RiskRule(
        rule_id="cv.many",
        factor="High cardiovascular risk",
        category=RiskCategory.CARDIOVASCULAR,
        severity=RiskSeverity.HIGH,
        description="Three or more cardiovascular risk factors present",
        recommendations=(
            "Consider cardiology referral",
            "Consider statin therapy if indicated",
        ),
        condition_patterns=_CV_INDICATORS,
        min_condition_matches=3,
    ),
    RiskRule(
        rule_id="infection.hiv",
        factor="HIV infection",
        category=RiskCategory.INFECTIOUS,
        severity=RiskSeverity.HIGH,
        description="Immunocompromised state requiring special considerations",
        recommendations=(
            "Monitor CD4 count and viral load",
            "Screen for opportunistic infections",
            "Consider drug interactions with ARVs",
            "Ensure adherence to antiretroviral therapy",
        ),
        condition_patterns=(r"\bhiv\b|\bretroviral|\barv\b",),
    ),
    RiskRule(
        rule_id="infection.tb",
        factor="Tuberculosis history/exposure",
        category=RiskCategory.INFECTIOUS,
        severity=RiskSeverity.HIGH,
        description="Risk of TB reactivation or treatment complications",
        recommendations=(
            "Monitor for TB symptoms",
            "Consider chest X-ray",
            "Ensure completion of TB treatment if active",
            "Screen household contacts",
        ),
        condition_patterns=(r"\btb\b|\btubercul",),
    ),
    RiskRule(
        rule_id="metabolic.diabetes",
        factor="Diabetes mellitus",
        category=RiskCategory.METABOLIC,
        severity=RiskSeverity.MEDIUM,
        description="Diabetes with no documented complications",
        recommendations=(
            "Monitor HbA1c every 3-6 months",
            "Annual diabetic screening (eyes, feet, kidneys)",
            "Blood pressure and lipid management",
            "Patient education on glucose monitoring",
        ),
        condition_patterns=(r"\bdiabet",),
    ),
    RiskRule(
        rule_id="metabolic.diabetes_complicated",
        factor="Diabetes mellitus",
        category=RiskCategory.METABOLIC,
        severity=RiskSeverity.HIGH,
        description="Diabetes with complications",
        recommendations=(
            "Refer for specialist review of complications",
        ),
        required_patterns=(r"\bdiabet",),
        condition_patterns=(r"\bnephropathy", r"\bretinopathy", r"\bneuropathy", r"\bfoot ulcer"),
    ),
    RiskRule(
        rule_id="respiratory.beta_blocker_asthma",
        factor="Bronchospasm risk",
        category=RiskCategory.RESPIRATORY,
        severity=RiskSeverity.HIGH,
        description="Non-selective beta-blockers can precipitate bronchospasm in asthma",
        recommendations=(
            "Review beta-blocker therapy",
            "Consider a calcium channel blocker or ACE inhibitor instead",
        ),
        condition_patterns=(r"\basthma",),
        medication_patterns=(r"\b(?:propranolol|atenolol|metoprolol|carvedilol)",),
    ),
    RiskRule(
        rule_id="renal.nsaid",
        factor="Nephrotoxicity",
        category=RiskCategory.MEDICATION,
        severity=RiskSeverity.HIGH,
        description="NSAIDs in renal impairment risk acute kidney injury",
        recommendations=(
            "Avoid NSAIDs; use paracetamol for analgesia",
            "Check renal function",
        ),
        condition_patterns=(r"\b(?:chronic )?kidney disease|\brenal (?:impairment|failure)|\bckd\b",),
        medication_patterns=(_NSAIDS,),
    ),
    RiskRule(
        rule_id="interaction.anticoagulant_bleeding",
        factor="Drug Interaction",
        category=RiskCategory.MEDICATION,
        severity=RiskSeverity.HIGH,
        description="Anticoagulant combined with an antiplatelet or NSAID increases bleeding risk",
        recommendations=(
            "Review the need for combined anticoagulant and antiplatelet therapy",
            "Monitor INR closely",
            "Counsel patient on signs of bleeding",
        ),
        medication_patterns=(r"\bwarfarin",),
        co_medication_patterns=(_ANTIPLATELETS, _NSAIDS),
    ),
    RiskRule(
        rule_id="interaction.hyperkalaemia",
        factor="Drug Interaction",
        category=RiskCategory.MEDICATION,
        severity=RiskSeverity.MEDIUM,
        description="ACE inhibitor with a potassium-sparing diuretic risks hyperkalaemia",
        recommendations=(
            "Check serum potassium and renal function",
            "Review diuretic choice",
        ),
        medication_patterns=(_ACE_INHIBITORS,),
        co_medication_patterns=(r"\b(?:spironolactone|amiloride)",),
    ),
    RiskRule(
        rule_id="interaction.rifampicin",
        factor="Drug Interaction",
        category=RiskCategory.MEDICATION,
        severity=RiskSeverity.MEDIUM,
        description="Rifampicin induces metabolism of antiretrovirals and hormonal contraceptives",
        recommendations=(
            "Review antiretroviral regimen with TB treatment",
            "Advise additional non-hormonal contraception",
        ),
        medication_patterns=(r"\brifampicin",),
        co_medication_patterns=(r"\b(?:efavirenz|nevirapine|lopinavir|dolutegravir|oral contraceptive)",),
    ),
    RiskRule(
        rule_id="medication.polypharmacy",
        factor="Polypharmacy",
        category=RiskCategory.MEDICATION,
        severity=RiskSeverity.MEDIUM,
        description="Five or more concurrent medications",
        recommendations=(
            "Perform a structured medication review",
            "Deprescribe where appropriate",
        ),
        min_medications=5,
    ),
    RiskRule(
        rule_id="neurological.falls",
        factor="Fall risk",
        category=RiskCategory.NEUROLOGICAL,
        severity=RiskSeverity.MEDIUM,
        description="Sedating medication in an older patient",
        recommendations=(
            "Review sedative and anticholinergic medications",
            "Assess gait and home safety",
        ),
        medication_patterns=(r"\b(?:diazepam|lorazepam|zolpidem|amitriptyline|diphenhydramine)",),
        min_age=66,
    ),
)


# ── Contraindication tables ──────────────────────────────────────────


@dataclass(frozen=True)
class AgeContraindication:
    medication: str
    reason: str
    alternatives: tuple[str, ...] = ()


@dataclass(frozen=True)
class ConditionContraindication:
    condition: str
    medications: tuple[str, ...]
    severity: AlertSeverity
    description: str
    alternatives: tuple[str, ...] = ()


@dataclass(frozen=True)
class DrugInteraction:
    drug: str
    interacts_with: str
    severity: AlertSeverity
    description: str
    alternatives: tuple[str, ...] = ()


ELDERLY_INAPPROPRIATE: tuple[AgeContraindication, ...] = (
    AgeContraindication("diazepam", "Increased fall risk and cognitive impairment",
                        ("short-acting agents at low dose", "sleep hygiene measures")),
    AgeContraindication("diphenhydramine", "Anticholinergic effects and confusion",
                        ("loratadine", "cetirizine")),
    AgeContraindication("amitriptyline", "Cardiac conduction abnormalities",
                        ("sertraline", "citalopram")),
    AgeContraindication("indomethacin", "CNS side effects and renal toxicity",
                        ("paracetamol", "topical NSAID")),
)

CONDITION_CONTRAINDICATIONS: tuple[ConditionContraindication, ...] = (
    ConditionContraindication(
        condition="asthma",
        medications=("propranolol", "atenolol", "metoprolol"),
        severity=AlertSeverity.CONTRAINDICATED,
        description="Beta-blockers can precipitate bronchospasm in asthmatic patients",
        alternatives=("amlodipine", "lisinopril", "losartan"),
    ),
    ConditionContraindication(
        condition="heart failure",
        medications=("verapamil", "diltiazem", "nifedipine"),
        severity=AlertSeverity.CAUTION,
        description="Calcium channel blockers may worsen heart failure",
        alternatives=("lisinopril", "carvedilol", "spironolactone"),
    ),
    ConditionContraindication(
        condition="kidney disease",
        medications=("metformin", "lithium", "ibuprofen", "diclofenac", "naproxen"),
        severity=AlertSeverity.CAUTION,
        description="Dose adjustment or avoidance required in renal impairment",
        alternatives=("insulin", "paracetamol"),
    ),
)

DRUG_INTERACTIONS: tuple[DrugInteraction, ...] = (
    DrugInteraction(
        drug="warfarin",
        interacts_with="aspirin",
        severity=AlertSeverity.CONTRAINDICATED,
        description="Significantly increased bleeding risk",
        alternatives=("clopidogrel (with careful monitoring)",),
    ),
    DrugInteraction(
        drug="metformin",
        interacts_with="contrast",
        severity=AlertSeverity.CAUTION,
        description="Risk of lactic acidosis with contrast procedures",
        alternatives=("Temporary discontinuation before contrast",),
    ),
    DrugInteraction(
        drug="rifampicin",
        interacts_with="efavirenz",
        severity=AlertSeverity.WARNING,
        description="Rifampicin lowers efavirenz levels",
        alternatives=("Adjust antiretroviral regimen with HIV clinician",),
    ),
)

EMERGENCY_KEYWORDS: tuple[str, ...] = (
    "chest pain", "shortness of breath", "severe", "acute", "emergency",
    "unconscious", "bleeding", "stroke", "heart attack",
)

URGENT_KEYWORDS: tuple[str, ...] = (
    "worsening", "deteriorating", "concerning", "significant", "new symptoms",
)


# ── Guideline compliance ─────────────────────────────────────────────


@dataclass(frozen=True)
class GuidelineCheck:
    label: str
    pattern: str


@dataclass(frozen=True)
class GuidelineRule:
    """A guideline that applies when ``trigger`` is documented.

    Compliance is decided by how many of ``checks`` the note satisfies.
    """

    guideline: str
    trigger: str
    checks: tuple[GuidelineCheck, ...]
    recommendations: tuple[str, ...]


GUIDELINE_RULES: tuple[GuidelineRule, ...] = (
    GuidelineRule(
        guideline="Hypertension Management (SEMDSA Guidelines)",
        trigger=r"\bhypertens|\bblood pressure|\bhigh bp\b",
        checks=(
            GuidelineCheck("Lifestyle advice", r"\bdiet|\bexercise|\blifestyle|\bsalt|\bweight (?:loss|management)"),
            GuidelineCheck("BP reading documented", r"\b\d{2,3}\s*/\s*\d{2,3}\b"),
        ),
        recommendations=(
            "Document blood pressure target (<140/90 for most patients)",
            "Provide lifestyle counselling (diet, exercise, weight management)",
            "Consider combination therapy for BP >160/100",
            "Regular monitoring schedule",
        ),
    ),
    GuidelineRule(
        guideline="Diabetes Management (SEMDSA Guidelines)",
        trigger=r"\bdiabet",
        checks=(
            GuidelineCheck("HbA1c mentioned", r"\bhba1c|\bglycated"),
            GuidelineCheck("Patient education", r"\beducat|\bmonitor|\bglucose"),
        ),
        recommendations=(
            "HbA1c target <7% for most patients",
            "Patient education on glucose monitoring",
            "Annual screening for complications",
            "Cardiovascular risk assessment",
        ),
    ),
)


# ── Documentation quality ────────────────────────────────────────────

NOTE_ELEMENTS: tuple[str, ...] = ("history", "examination", "assessment", "plan")
REASONING_CUES: tuple[str, ...] = ("because", "therefore", "due to", "caused by", "likely", "differential")
EVIDENCE_CUES: tuple[str, ...] = ("guideline", "study", "evidence", "research", "protocol")
REASONING_SATURATION = 3
EVIDENCE_SATURATION = 2
