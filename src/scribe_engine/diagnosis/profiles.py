"""Declarative condition profiles for the differential diagnosis engine.

Each profile lists weighted supporting and opposing features (regex
patterns matched case-insensitively against the evidence corpus), a
demographic prior expressed in the same weight units, and the questions,
investigations and referral that go with the condition.  Adding a
condition is a data change only: append a ``ConditionProfile``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Iterator, Optional, Pattern

from scribe_engine.models import (
    Availability,
    CostCategory,
    EmergencyLevel,
    Investigation,
    InvestigationType,
    InvestigationUrgency,
)


@lru_cache(maxsize=1024)
def _compile(pattern: str) -> Pattern[str]:
    return re.compile(pattern, re.IGNORECASE)


@dataclass(frozen=True)
class Feature:
    """A weighted clinical feature recognised by one or more patterns."""

    label: str
    weight: float
    patterns: tuple[str, ...]

    def finditer(self, text: str) -> Iterator[re.Match[str]]:
        for pattern in self.patterns:
            yield from _compile(pattern).finditer(text)


@dataclass(frozen=True)
class AgeBand:
    """Inclusive age range; ``None`` leaves that side open."""

    min_age: Optional[int]
    max_age: Optional[int]
    adjustment: float

    def contains(self, age: int) -> bool:
        if self.min_age is not None and age < self.min_age:
            return False
        if self.max_age is not None and age > self.max_age:
            return False
        return True


@dataclass(frozen=True)
class DemographicPrior:
    age_bands: tuple[AgeBand, ...] = ()
    sex: dict[str, float] = field(default_factory=dict)

    def adjustment(self, age: Optional[int], sex: Optional[str]) -> float:
        total = 0.0
        if age is not None:
            total += sum(b.adjustment for b in self.age_bands if b.contains(age))
        if sex is not None:
            total += self.sex.get(sex, 0.0)
        return total


@dataclass(frozen=True)
class ConditionProfile:
    name: str
    icd10_code: str
    emergency_level: EmergencyLevel
    supporting: tuple[Feature, ...]
    opposing: tuple[Feature, ...] = ()
    prior: DemographicPrior = field(default_factory=DemographicPrior)
    key_discriminators: tuple[str, ...] = ()
    key_questions: tuple[str, ...] = ()
    investigations: tuple[Investigation, ...] = ()
    specialty_referral: Optional[str] = None

    @property
    def max_support(self) -> float:
        return sum(f.weight for f in self.supporting)


def _f(label: str, weight: float, *patterns: str) -> Feature:
    return Feature(label=label, weight=weight, patterns=patterns)


def _inv(
    test: str,
    type_: InvestigationType,
    urgency: InvestigationUrgency,
    cost: CostCategory,
    availability: Availability,
    expected: str,
) -> Investigation:
    return Investigation(
        test=test,
        type=type_,
        urgency=urgency,
        cost_category=cost,
        availability=availability,
        expected_result=expected,
    )


_LAB = InvestigationType.LABORATORY
_IMAGING = InvestigationType.IMAGING
_BEDSIDE = InvestigationType.BEDSIDE
_PROCEDURE = InvestigationType.PROCEDURE
_STAT = InvestigationUrgency.STAT
_URGENT = InvestigationUrgency.URGENT
_ROUTINE = InvestigationUrgency.ROUTINE
_BASIC = CostCategory.BASIC
_MODERATE = CostCategory.MODERATE
_EXPENSIVE = CostCategory.EXPENSIVE
_PRIMARY = Availability.PRIMARY_CARE
_DISTRICT = Availability.DISTRICT_HOSPITAL
_TERTIARY = Availability.TERTIARY_CARE

# Shared patterns
_COUGH = r"\bcough"
_DRY_COUGH = r"\bdry cough|\bnon-?productive cough|\btickly cough"
_PRODUCTIVE = r"(?<![-\w])productive cough|\bsputum|\bphlegm|\bcoughing up (?!blood)"
_FEVER = r"(?<!hay )\bfever|\bfebrile|\bpyrexi|\bhigh temperature"
_AFEBRILE = r"\bafebrile|\bapyrexial"
_NOCTURNAL = r"\bnocturnal|\bworse at night|\bnight-?time cough|\bat night"
_DYSPNOEA = r"\bshort(?:ness)? of breath|\bdyspno?ea|\bbreathless"
_HEADACHE = r"\bheadache|\bcephalgia"
_NAUSEA = r"\bnausea|\bvomit"
_NECK_STIFF = r"\bneck stiffness|\bstiff neck|\bmeningism"
_PHOTOPHOBIA = r"\bphotophob|\bsensitiv\w* to (?:bright )?light"
_WEIGHT_LOSS = r"\bweight loss|\blost weight|\blosing weight"
_ABDO_PAIN = r"\babdominal pain|\btummy pain|\bstomach (?:pain|ache)|\bbelly pain"
_CLEAR_CHEST = r"\bclear (?:lung fields|chest)|\bchest (?:is )?clear|\blungs? (?:are )?clear"
_STABLE_VITALS = r"\bstable vitals|\bnormal vitals|\bvitals (?:are )?(?:stable|normal)|\bhaemodynamically stable"
_OBESITY = r"\bobes|\boverweight"


CONDITION_PROFILES: tuple[ConditionProfile, ...] = (
    # ── Cardiorespiratory ────────────────────────────────────────────
    ConditionProfile(
        name="Acute Coronary Syndrome",
        icd10_code="I24.9",
        emergency_level=EmergencyLevel.IMMEDIATE,
        supporting=(
            _f("chest pain", 3, r"\bchest (?:pain|tightness|pressure|heaviness)"),
            _f("radiation to arm or jaw", 3, r"\bradiat\w* (?:in)?to (?:the )?(?:left )?(?:arm|jaw|neck|shoulder)"),
            _f("diaphoresis", 2, r"\bdiaphore|\bclammy|\bsweaty|\bsweating"),
            _f("exertional onset", 2, r"\bon exertion|\bexertional|\bwhen climbing stairs"),
            _f("breathlessness", 1, _DYSPNOEA),
            _f("nausea", 1, _NAUSEA),
            _f("cardiovascular risk factors", 2,
               r"\bhypertension|\bdiabet|\bsmok|\bhyperlipid|\bhigh cholesterol|\bfamily history of (?:heart|cardiac)"),
        ),
        opposing=(
            _f("pleuritic pain", 2, r"\bpleuritic|\bworse on (?:deep )?breathing|\bworse on inspiration"),
            _f("reproducible chest wall tenderness", 3, r"\bchest wall tender|\breproducible (?:on|with) palpation"),
        ),
        prior=DemographicPrior(
            age_bands=(AgeBand(None, 30, -1.0), AgeBand(40, 64, 1.0), AgeBand(65, None, 2.0)),
            sex={"male": 0.5},
        ),
        key_discriminators=("chest pain", "radiation to arm or jaw"),
        key_questions=(
            "When did the chest pain start and how long does each episode last?",
            "Is the pain brought on by exertion and relieved by rest?",
            "Any previous heart attack, angina or cardiac procedures?",
        ),
        investigations=(
            _inv("12-lead ECG", _BEDSIDE, _STAT, _BASIC, _PRIMARY, "ST changes or new LBBB"),
            _inv("Troponin", _LAB, _STAT, _MODERATE, _DISTRICT, "Raised above the 99th percentile"),
        ),
        specialty_referral="Cardiology",
    ),
    ConditionProfile(
        name="Pulmonary Embolism",
        icd10_code="I26.9",
        emergency_level=EmergencyLevel.URGENT,
        supporting=(
            _f("pleuritic chest pain", 3, r"\bpleuritic|\bsharp chest pain worse on breathing"),
            _f("sudden breathlessness", 3, r"\bsudden(?:ly)? (?:onset )?(?:of )?(?:short|breathless|dyspno)"),
            _f("haemoptysis", 2, r"\bha?emoptysis|\bcoughing (?:up )?blood"),
            _f("tachycardia", 2, r"\btachycard|\bheart rate (?:of )?1[0-9]{2}|\bpulse (?:of )?1[0-9]{2}"),
            _f("unilateral leg swelling", 3, r"\bcalf (?:pain|swelling|tender)|\bleg swelling|\bdvt\b"),
            _f("immobilisation or travel", 2, r"\blong[- ](?:haul )?(?:flight|journey)|\bimmobil|\brecent surgery|\bbed ?rest"),
            _f("oestrogen exposure", 1, r"\boral contracept|\bthe pill\b|\bo?estrogen|\bhrt\b"),
        ),
        opposing=(
            _f("gradual onset over weeks", 1, r"\bgradual(?:ly)? (?:onset|worsening)"),
        ),
        key_discriminators=("sudden breathlessness", "unilateral leg swelling"),
        key_questions=(
            "Any recent travel, surgery or immobilisation?",
            "Any previous blood clots or family history of clotting disorders?",
            "Did the breathlessness come on suddenly?",
        ),
        investigations=(
            _inv("D-dimer", _LAB, _URGENT, _MODERATE, _DISTRICT, "Raised; a normal result makes PE unlikely"),
            _inv("CT pulmonary angiogram", _IMAGING, _URGENT, _EXPENSIVE, _TERTIARY, "Filling defect in pulmonary arteries"),
        ),
        specialty_referral="Internal Medicine",
    ),
    ConditionProfile(
        name="Heart Failure",
        icd10_code="I50.9",
        emergency_level=EmergencyLevel.SOON,
        supporting=(
            _f("paroxysmal nocturnal dyspnoea", 3, r"\bparoxysmal nocturnal dyspno?ea|\bpnd\b|\bwakes up breathless"),
            _f("orthopnoea", 3, r"\borthopno?ea|\bbreathless (?:when )?lying flat|\bextra pillows"),
            _f("peripheral oedema", 2, r"\b(?:ankle|pedal|leg) (?:swelling|o?edema)|\bpitting o?edema"),
            _f("exertional breathlessness", 2,
               r"\b(?:short(?:ness)? of breath|breathless(?:ness)?|dyspno?ea) on exertion|\bexertional dyspno?ea"),
            _f("basal crackles", 2, r"\b(?:bi)?basal crackles|\bfine crackles"),
            _f("raised JVP", 2, r"\b(?:raised|elevated) jvp|\bjugular venous distension"),
            _f("cardiac history", 1, r"\bmyocardial infarction|\bheart attack|\bcardiomyopathy|\bischa?emic heart"),
        ),
        prior=DemographicPrior(age_bands=(AgeBand(None, 39, -1.0), AgeBand(65, None, 1.0))),
        key_discriminators=("orthopnoea", "peripheral oedema"),
        key_questions=(
            "How many pillows do you sleep on, and do you wake at night short of breath?",
            "How far can you walk before becoming breathless?",
            "Have you noticed ankle swelling or rapid weight gain?",
        ),
        investigations=(
            _inv("NT-proBNP", _LAB, _URGENT, _MODERATE, _DISTRICT, "Raised"),
            _inv("Chest X-ray", _IMAGING, _URGENT, _BASIC, _DISTRICT, "Cardiomegaly, pulmonary congestion"),
            _inv("Echocardiogram", _IMAGING, _ROUTINE, _EXPENSIVE, _TERTIARY, "Reduced ejection fraction"),
        ),
        specialty_referral="Cardiology",
    ),
    ConditionProfile(
        name="Community-acquired Pneumonia",
        icd10_code="J18.9",
        emergency_level=EmergencyLevel.URGENT,
        supporting=(
            _f("cough", 1, _COUGH),
            _f("fever", 3, _FEVER),
            _f("productive cough", 2, _PRODUCTIVE),
            _f("focal crackles or bronchial breathing", 3, r"\bcrackles|\bbronchial breathing|\bdull(?:ness)? to percussion"),
            _f("tachypnoea", 2, r"\btachypno?ea|\brespiratory rate (?:of )?(?:2[4-9]|[3-9]\d)"),
            _f("pleuritic chest pain", 2, r"\bpleuritic"),
        ),
        opposing=(
            _f("clear lung fields", 3, _CLEAR_CHEST),
            _f("afebrile", 2, _AFEBRILE),
            _f("stable vitals", 1, _STABLE_VITALS),
        ),
        prior=DemographicPrior(age_bands=(AgeBand(65, None, 1.0),)),
        key_discriminators=("fever", "focal crackles or bronchial breathing"),
        key_questions=(
            "How long have you had the cough, and has anyone around you been unwell?",
            "Any fever, rigors or chest pain on breathing?",
        ),
        investigations=(
            _inv("Chest X-ray", _IMAGING, _URGENT, _BASIC, _DISTRICT, "Consolidation"),
            _inv("Full blood count and CRP", _LAB, _URGENT, _BASIC, _PRIMARY, "Raised white cells and CRP"),
            _inv("Pulse oximetry", _BEDSIDE, _STAT, _BASIC, _PRIMARY, "Saturation below 94%"),
        ),
    ),
    ConditionProfile(
        name="Acute Bronchitis",
        icd10_code="J20.9",
        emergency_level=EmergencyLevel.ROUTINE,
        supporting=(
            _f("cough", 2, _COUGH),
            _f("productive cough", 3, _PRODUCTIVE),
            _f("low-grade fever", 2, _FEVER),
            _f("chest discomfort", 1, r"\bchest (?:discomfort|soreness)|\bsore chest"),
            _f("recent onset", 1, r"\b(?:few|couple of|[1-9]) days\b"),
        ),
        key_discriminators=("productive cough",),
        key_questions=(
            "How long has the cough been present and is it bringing up sputum?",
            "Any exposure to smoke, dust or people with a similar illness?",
        ),
        investigations=(
            _inv("Pulse oximetry", _BEDSIDE, _ROUTINE, _BASIC, _PRIMARY, "Normal saturation"),
        ),
    ),
    ConditionProfile(
        name="Cough-variant Asthma",
        icd10_code="J45.9",
        emergency_level=EmergencyLevel.ROUTINE,
        supporting=(
            _f("dry cough", 3, _DRY_COUGH),
            _f("nocturnal worsening", 3, _NOCTURNAL),
            _f("wheeze", 2, r"\bwheez"),
            _f("trigger exposure", 2, r"\bcold air|\bexercise|\ballerg|\bdust|\bsmoke|\bpollen|\bpets?\b"),
            _f("personal atopy", 1, r"\beczema|\bhay fever|\batop(?:y|ic)|\ballergic rhinitis"),
        ),
        opposing=(
            _f("productive cough", 2, _PRODUCTIVE),
            _f("fever", 2, _FEVER),
        ),
        prior=DemographicPrior(age_bands=(AgeBand(None, 39, 0.5),)),
        key_discriminators=("wheeze", "trigger exposure"),
        key_questions=(
            "How long has the cough been present, and has it happened before?",
            "Any exposure to triggers such as cold air, exercise, smoke, dust or pets?",
            "Any personal or family history of asthma, eczema or hay fever?",
        ),
        investigations=(
            _inv("Peak flow diary", _BEDSIDE, _ROUTINE, _BASIC, _PRIMARY, "Diurnal variability above 20%"),
            _inv("Spirometry with bronchodilator reversibility", _PROCEDURE, _ROUTINE, _MODERATE, _DISTRICT,
                 "FEV1 improvement of 12% or more"),
        ),
    ),
    ConditionProfile(
        name="Post-viral Cough",
        icd10_code="R05",
        emergency_level=EmergencyLevel.ROUTINE,
        supporting=(
            _f("dry cough", 2, _DRY_COUGH),
            _f("recent viral illness", 3,
               r"\b(?:recent|preceding|after (?:a|the)) (?:cold|flu|viral|upper respiratory|uri)"),
            _f("duration of weeks", 2, r"\b(?:[2-8]|two|three|four|five|six|seven|eight)\s*weeks?\b"),
            _f("coryza or sore throat", 2, r"\bcoryza|\brunny nose|\bsore throat"),
            _f("clear chest on examination", 1, _CLEAR_CHEST),
            _f("gradual improvement", 1, r"\bimproving|\bgetting better|\bsettling"),
        ),
        opposing=(
            _f("fever", 2, _FEVER),
            _f("weight loss", 2, _WEIGHT_LOSS),
        ),
        key_discriminators=("recent viral illness",),
        key_questions=(
            "How long has the cough lasted, and did it start after a cold or flu?",
            "Has anyone at home or work had a similar illness?",
        ),
        investigations=(
            _inv("Chest X-ray if cough persists beyond 8 weeks", _IMAGING, _ROUTINE, _BASIC, _DISTRICT,
                 "Normal"),
        ),
    ),
    ConditionProfile(
        name="Gastro-oesophageal Reflux Disease",
        icd10_code="K21.9",
        emergency_level=EmergencyLevel.ROUTINE,
        supporting=(
            _f("heartburn", 3, r"\bheartburn|\bindigestion|\bdyspepsia|\bacid (?:taste|reflux)"),
            _f("worse lying down or at night", 2, r"\blying (?:down|flat)|\bworse at night|\bnocturnal"),
            _f("dry cough", 1, _DRY_COUGH),
            _f("regurgitation", 3, r"\bregurgitat|\bsour taste|\bwater brash"),
            _f("postprandial symptoms", 2, r"\bafter (?:meals|eating)|\bpost-?prandial"),
        ),
        opposing=(
            _f("dysphagia or weight loss", 2, r"\bdysphagia|\bdifficulty swallowing|" + _WEIGHT_LOSS),
        ),
        key_discriminators=("heartburn", "regurgitation"),
        key_questions=(
            "Any heartburn, sour taste or regurgitation, especially after meals or lying down?",
            "Any difficulty swallowing or unintentional weight loss?",
        ),
        investigations=(
            _inv("Trial of proton pump inhibitor", _BEDSIDE, _ROUTINE, _BASIC, _PRIMARY, "Symptom resolution"),
        ),
    ),
    ConditionProfile(
        name="Upper Airway Cough Syndrome",
        icd10_code="R09.82",
        emergency_level=EmergencyLevel.ROUTINE,
        supporting=(
            _f("cough", 2, _COUGH),
            _f("postnasal drip", 3, r"\bpost-?nasal drip|\bdrip(?:ping)? (?:down|at) the back of the throat"),
            _f("nasal congestion", 2, r"\bnasal congestion|\bblocked nose|\bstuffy nose|\brhinorrh"),
            _f("frequent throat clearing", 1, r"\bthroat clearing|\bclearing (?:the|my|her|his) throat"),
            _f("sinus history", 1, r"\bsinusitis|\bsinus"),
        ),
        key_discriminators=("postnasal drip",),
        key_questions=(
            "How long has the cough been present, and is there a feeling of mucus dripping down the throat?",
            "Any exposure to allergens or seasonal pattern to the symptoms?",
        ),
        investigations=(
            _inv("Trial of intranasal corticosteroid", _BEDSIDE, _ROUTINE, _BASIC, _PRIMARY, "Symptom resolution"),
        ),
    ),
    ConditionProfile(
        name="Pulmonary Tuberculosis",
        icd10_code="A15.0",
        emergency_level=EmergencyLevel.SOON,
        supporting=(
            _f("productive cough", 2, _PRODUCTIVE),
            _f("night sweats", 3, r"\bnight sweats|\bdrenching sweats"),
            _f("weight loss", 3, _WEIGHT_LOSS),
            _f("haemoptysis", 2, r"\bha?emoptysis|\bcoughing (?:up )?blood"),
            _f("TB contact", 3, r"\btb contact|\bcontact with (?:a )?(?:tb|tuberculosis)|\bhousehold contact"),
            _f("fever", 1, _FEVER),
            _f("HIV or immunosuppression", 2, r"\bhiv\b|\bretroviral|\bimmunosuppress"),
        ),
        key_discriminators=("night sweats", "weight loss"),
        key_questions=(
            "How long has the cough been present, and is there sputum or blood?",
            "Any contact with someone who has TB, or previous TB treatment?",
            "What is your HIV status?",
        ),
        investigations=(
            _inv("Sputum GeneXpert MTB/RIF", _LAB, _URGENT, _MODERATE, _PRIMARY, "MTB detected"),
            _inv("Chest X-ray", _IMAGING, _URGENT, _BASIC, _DISTRICT, "Upper lobe cavitation or infiltrates"),
            _inv("HIV test", _LAB, _ROUTINE, _BASIC, _PRIMARY, "Status known"),
        ),
    ),
    ConditionProfile(
        name="Chronic Obstructive Pulmonary Disease",
        icd10_code="J44.9",
        emergency_level=EmergencyLevel.SOON,
        supporting=(
            _f("smoking history", 3, r"\bsmok|\bpack[- ]years?"),
            _f("productive cough", 2, _PRODUCTIVE),
            _f("exertional breathlessness", 2,
               r"\b(?:short(?:ness)? of breath|breathless(?:ness)?|dyspno?ea) on exertion|\bexertional dyspno?ea"),
            _f("wheeze", 1, r"\bwheez"),
            _f("recurrent chest infections", 1, r"\brecurrent chest infections|\bwinter exacerbations"),
        ),
        prior=DemographicPrior(age_bands=(AgeBand(None, 34, -1.0), AgeBand(40, None, 0.5))),
        key_discriminators=("smoking history",),
        key_questions=(
            "How many years have you smoked and how much per day?",
            "Any occupational exposure to dust, fumes or biomass smoke?",
        ),
        investigations=(
            _inv("Spirometry", _PROCEDURE, _ROUTINE, _MODERATE, _DISTRICT, "FEV1/FVC below 0.7 post-bronchodilator"),
        ),
        specialty_referral="Pulmonology",
    ),
    # ── Headache ─────────────────────────────────────────────────────
    ConditionProfile(
        name="Migraine",
        icd10_code="G43.9",
        emergency_level=EmergencyLevel.ROUTINE,
        supporting=(
            _f("headache", 1, _HEADACHE),
            _f("unilateral headache", 2, r"\bunilateral|\bone side of (?:the|my|her|his) head|\bhemicran"),
            _f("throbbing quality", 2, r"\bthrobbing|\bpulsating|\bpounding"),
            _f("photophobia", 3, _PHOTOPHOBIA),
            _f("nausea", 2, _NAUSEA),
            _f("aura", 3, r"\baura|\bzig-?zag|\bflashing lights|\bscintillat"),
            _f("recurrent similar episodes", 1, r"\brecurrent|\bprevious episodes|\bsimilar headaches"),
        ),
        opposing=(
            _f("thunderclap onset", 3, r"\bthunderclap|\bworst headache"),
            _f("fever", 2, _FEVER),
            _f("neck stiffness", 2, _NECK_STIFF),
        ),
        prior=DemographicPrior(age_bands=(AgeBand(15, 50, 0.5),), sex={"female": 0.5}),
        key_discriminators=("photophobia", "aura"),
        key_questions=(
            "How long do the headaches last and how often do they occur?",
            "Any visual disturbance before the headache starts?",
            "What makes the headache better or worse?",
        ),
    ),
    ConditionProfile(
        name="Tension-type Headache",
        icd10_code="G44.2",
        emergency_level=EmergencyLevel.ROUTINE,
        supporting=(
            _f("headache", 1, _HEADACHE),
            _f("bilateral band-like pressure", 3, r"\bband[- ]like|\bbilateral|\btight band|\bpressing|\bvice-?like"),
            _f("stress or poor sleep", 2, r"\bstress|\banxi|\bpoor sleep|\bworkload"),
            _f("neck or shoulder tension", 1, r"\bneck (?:tension|tightness)|\bshoulder tension|\btight (?:neck|shoulders)"),
        ),
        opposing=(
            _f("nausea or vomiting", 1, _NAUSEA),
            _f("photophobia", 1, _PHOTOPHOBIA),
        ),
        key_discriminators=("bilateral band-like pressure",),
        key_questions=(
            "How long has the headache been present and how often does it occur?",
            "Any recent stress, poor sleep or long hours at a screen?",
        ),
    ),
    ConditionProfile(
        name="Subarachnoid Haemorrhage",
        icd10_code="I60.9",
        emergency_level=EmergencyLevel.IMMEDIATE,
        supporting=(
            _f("thunderclap headache", 3,
               r"\bthunderclap|\bsudden(?:-| )onset (?:severe )?headache|\bworst headache"),
            _f("neck stiffness", 2, _NECK_STIFF),
            _f("vomiting", 1, r"\bvomit"),
            _f("reduced consciousness or collapse", 3, r"\bcollapse|\bloss of consciousness|\bconfus|\bdrowsy|\breduced gcs"),
            _f("headache", 1, _HEADACHE),
        ),
        key_discriminators=("thunderclap headache",),
        key_questions=(
            "Did the headache reach maximum intensity within a minute?",
            "Any loss of consciousness, seizure or neck stiffness?",
        ),
        investigations=(
            _inv("Non-contrast CT head", _IMAGING, _STAT, _EXPENSIVE, _DISTRICT, "Subarachnoid blood"),
            _inv("Lumbar puncture if CT negative", _PROCEDURE, _URGENT, _MODERATE, _DISTRICT, "Xanthochromia"),
        ),
        specialty_referral="Neurosurgery",
    ),
    ConditionProfile(
        name="Bacterial Meningitis",
        icd10_code="G00.9",
        emergency_level=EmergencyLevel.IMMEDIATE,
        supporting=(
            _f("fever", 3, _FEVER),
            _f("neck stiffness", 3, _NECK_STIFF),
            _f("photophobia", 1, _PHOTOPHOBIA),
            _f("non-blanching rash", 3, r"\bnon-?blanching|\bpetechia|\bpurpur"),
            _f("confusion", 2, r"\bconfus|\baltered mental|\bdrowsy"),
            _f("headache", 1, _HEADACHE),
        ),
        opposing=(
            _f("afebrile", 2, _AFEBRILE),
        ),
        key_discriminators=("fever", "neck stiffness"),
        key_questions=(
            "When did the fever and headache start?",
            "Any rash, confusion or contact with someone with meningitis?",
        ),
        investigations=(
            _inv("Blood cultures", _LAB, _STAT, _BASIC, _DISTRICT, "Bacterial growth"),
            _inv("Lumbar puncture", _PROCEDURE, _STAT, _MODERATE, _DISTRICT, "Turbid CSF, high neutrophils, low glucose"),
        ),
        specialty_referral="Infectious Diseases",
    ),
    # ── Abdominal ────────────────────────────────────────────────────
    ConditionProfile(
        name="Acute Appendicitis",
        icd10_code="K35.8",
        emergency_level=EmergencyLevel.URGENT,
        supporting=(
            _f("right iliac fossa pain", 3, r"\bright (?:lower|iliac) (?:quadrant|fossa)|\brif (?:pain|tender)|\brlq\b"),
            _f("pain migrating from periumbilical region", 3, r"\bperi-?umbilical|\bmigrat\w* to the right"),
            _f("anorexia", 2, r"\banorexia|\bloss of appetite|\bappetite loss|\bnot eating"),
            _f("fever", 1, _FEVER),
            _f("nausea or vomiting", 1, _NAUSEA),
            _f("peritonism", 3, r"\brebound|\bguarding|\brovsing|\bmcburney"),
            _f("abdominal pain", 1, _ABDO_PAIN),
        ),
        opposing=(
            _f("diarrhoea", 1, r"\bdiarrh"),
        ),
        prior=DemographicPrior(age_bands=(AgeBand(10, 30, 0.5),)),
        key_discriminators=("right iliac fossa pain", "peritonism"),
        key_questions=(
            "Where did the pain start and has it moved?",
            "When did you last eat, and any vomiting?",
        ),
        investigations=(
            _inv("Full blood count and CRP", _LAB, _URGENT, _BASIC, _PRIMARY, "Leucocytosis"),
            _inv("Abdominal ultrasound", _IMAGING, _URGENT, _MODERATE, _DISTRICT, "Non-compressible appendix"),
        ),
        specialty_referral="General Surgery",
    ),
    ConditionProfile(
        name="Acute Gastroenteritis",
        icd10_code="A09",
        emergency_level=EmergencyLevel.ROUTINE,
        supporting=(
            _f("diarrhoea", 3, r"\bdiarrh|\bloose stools?|\bwatery stools?"),
            _f("vomiting", 2, r"\bvomit"),
            _f("abdominal cramps", 2, r"\bcramp"),
            _f("food or contact exposure", 2,
               r"\bfood poisoning|\bate out|\btakeaway|\bsick contacts|\bothers (?:are )?(?:also )?sick|\bcontaminated"),
            _f("fever", 1, _FEVER),
            _f("abdominal pain", 1, _ABDO_PAIN),
        ),
        opposing=(
            _f("peritonism", 3, r"\brebound|\bguarding"),
        ),
        key_discriminators=("diarrhoea",),
        key_questions=(
            "How many episodes of diarrhoea or vomiting, and is there blood in the stool?",
            "Is anyone else at home unwell, or any suspect food exposure?",
            "Are you able to keep fluids down?",
        ),
        investigations=(
            _inv("Urea and electrolytes", _LAB, _ROUTINE, _BASIC, _PRIMARY, "Assess dehydration"),
        ),
    ),
    ConditionProfile(
        name="Urinary Tract Infection",
        icd10_code="N39.0",
        emergency_level=EmergencyLevel.ROUTINE,
        supporting=(
            _f("dysuria", 3, r"\bdysuria|\bburning (?:on|when) (?:urinat|passing urine)|\bpain(?:ful)? (?:on|when) urinat"),
            _f("urinary frequency", 2, r"\burinary frequency|\bfrequency of micturition|\bfrequent urination"),
            _f("urinary urgency", 2, r"\burinary urgency|\burgency to urinate"),
            _f("suprapubic pain", 2, r"\bsuprapubic"),
            _f("abnormal urine", 2, r"\bcloudy urine|\bfoul[- ]smelling urine|\bha?ematuria|\bblood in (?:the )?urine"),
            _f("fever", 1, _FEVER),
        ),
        opposing=(
            _f("vaginal discharge", 2, r"\bvaginal discharge"),
        ),
        prior=DemographicPrior(sex={"female": 1.0, "male": -0.5}),
        key_discriminators=("dysuria",),
        key_questions=(
            "How long have the urinary symptoms been present?",
            "Any fever, loin pain or vaginal discharge?",
            "Could you be pregnant?",
        ),
        investigations=(
            _inv("Urine dipstick", _BEDSIDE, _ROUTINE, _BASIC, _PRIMARY, "Nitrites and leucocytes positive"),
            _inv("Urine microscopy and culture", _LAB, _ROUTINE, _BASIC, _DISTRICT, "Significant bacteriuria"),
        ),
    ),
    # ── Chronic metabolic ────────────────────────────────────────────
    ConditionProfile(
        name="Type 2 Diabetes Mellitus",
        icd10_code="E11.9",
        emergency_level=EmergencyLevel.SOON,
        supporting=(
            _f("polyuria", 3, r"\bpolyuria|\bpassing (?:lots of|a lot of) urine|\burinating (?:a lot|frequently)"),
            _f("polydipsia", 3, r"\bpolydipsia|\bexcessive thirst|\b(?:very|always) thirsty"),
            _f("raised glucose", 3, r"\b(?:raised|high|elevated) (?:blood )?(?:glucose|sugar)|\bhba1c"),
            _f("known diabetes", 3, r"\bdiabet"),
            _f("weight loss", 1, _WEIGHT_LOSS),
            _f("fatigue", 1, r"\bfatigue|\btired"),
            _f("blurred vision", 1, r"\bblurred vision|\bblurry vision"),
            _f("obesity", 1, _OBESITY),
        ),
        prior=DemographicPrior(age_bands=(AgeBand(40, None, 0.5),)),
        key_discriminators=("raised glucose",),
        key_questions=(
            "How long have you had increased thirst or urination?",
            "Any family history of diabetes?",
            "What does a typical day of eating look like?",
        ),
        investigations=(
            _inv("HbA1c", _LAB, _ROUTINE, _BASIC, _PRIMARY, "48 mmol/mol (6.5%) or higher"),
            _inv("Fasting plasma glucose", _LAB, _ROUTINE, _BASIC, _PRIMARY, "7.0 mmol/L or higher"),
            _inv("Urine albumin-creatinine ratio", _LAB, _ROUTINE, _BASIC, _DISTRICT, "Screen for nephropathy"),
        ),
        specialty_referral="Endocrinology",
    ),
    ConditionProfile(
        name="Essential Hypertension",
        icd10_code="I10",
        emergency_level=EmergencyLevel.ROUTINE,
        supporting=(
            _f("raised blood pressure", 3,
               r"\b(?:1[4-9]\d|2\d\d)\s*/\s*(?:9\d|1[0-4]\d)\b|\bhigh blood pressure|\bhypertens|\b(?:raised|elevated) (?:bp|blood pressure)"),
            _f("headache", 1, _HEADACHE),
            _f("family history", 1, r"\bfamily history of (?:hypertension|high blood pressure)"),
            _f("obesity", 1, _OBESITY),
            _f("salt or alcohol excess", 1, r"\bsalt|\balcohol"),
        ),
        prior=DemographicPrior(age_bands=(AgeBand(40, None, 0.5),)),
        key_discriminators=("raised blood pressure",),
        key_questions=(
            "Have you had raised blood pressure readings before?",
            "Any headaches, visual changes or chest pain?",
        ),
        investigations=(
            _inv("Repeat blood pressure measurement", _BEDSIDE, _ROUTINE, _BASIC, _PRIMARY, "Sustained above 140/90"),
            _inv("Urea, electrolytes and creatinine", _LAB, _ROUTINE, _BASIC, _PRIMARY, "Assess renal function"),
            _inv("12-lead ECG", _BEDSIDE, _ROUTINE, _BASIC, _PRIMARY, "Left ventricular hypertrophy"),
        ),
    ),
)


def find_profile(name: str) -> Optional[ConditionProfile]:
    """Look up a profile by condition name or ICD-10 code (case-insensitive)."""
    needle = name.strip().lower()
    for profile in CONDITION_PROFILES:
        if needle in (profile.name.lower(), profile.icd10_code.lower()):
            return profile
    return None
