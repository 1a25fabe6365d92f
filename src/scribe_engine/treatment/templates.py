"""Static treatment protocol templates.

Each ``ProtocolTemplate`` is keyed by a condition name plus aliases (other
spellings and the ICD-10 code used by the diagnosis registry).  Interventions
carry per-severity dosing; the generator picks the variant for the requested
severity and falls back to the moderate variant.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional

from scribe_engine.models import CareSetting, EvidenceLevel, ProtocolSeverity, TreatmentType

_MILD = ProtocolSeverity.MILD
_MODERATE = ProtocolSeverity.MODERATE
_SEVERE = ProtocolSeverity.SEVERE
_ALL = frozenset(ProtocolSeverity)

# Primary-care essential medicines list; matched by lowercase prefix of the
# intervention name.
ESSENTIAL_MEDICINES: frozenset[str] = frozenset({
    "paracetamol", "ibuprofen", "aspirin", "clopidogrel", "heparin", "enoxaparin",
    "furosemide", "enalapril", "amlodipine", "hydrochlorothiazide", "metformin",
    "gliclazide", "insulin", "amoxicillin", "co-amoxiclav", "ceftriaxone",
    "azithromycin", "doxycycline", "nitrofurantoin", "ciprofloxacin", "salbutamol",
    "budesonide", "beclomethasone", "prednisone", "oral rehydration solution",
    "simvastatin", "carvedilol", "spironolactone", "tenecteplase",
})


def is_essential(intervention: str) -> bool:
    name = intervention.lower()
    return any(name.startswith(med) for med in ESSENTIAL_MEDICINES)


@dataclass(frozen=True)
class Dosing:
    dosage: Optional[str]
    duration: str


@dataclass(frozen=True)
class Intervention:
    name: str
    type: TreatmentType
    evidence: EvidenceLevel
    dosing: Mapping[ProtocolSeverity, Dosing]
    instructions: str = ""
    contraindications: tuple[str, ...] = ()
    severities: frozenset[ProtocolSeverity] = _ALL
    side_effects: tuple[str, ...] = ()


@dataclass(frozen=True)
class Monitoring:
    parameter: str
    method: str
    frequency: str
    target: str


@dataclass(frozen=True)
class Complication:
    complication: str
    recognition: tuple[str, ...]
    management: str
    escalation: str


@dataclass(frozen=True)
class ProtocolTemplate:
    condition: str
    aliases: tuple[str, ...]
    settings: Mapping[ProtocolSeverity, CareSetting]
    primary: tuple[Intervention, ...]
    follow_up_interval: Mapping[ProtocolSeverity, str]
    alternative: tuple[Intervention, ...] = ()
    monitoring: tuple[Monitoring, ...] = ()
    assessment: tuple[str, ...] = ()
    red_flags: tuple[str, ...] = ()
    complications: tuple[Complication, ...] = ()
    education: tuple[str, ...] = ()
    keys: tuple[str, ...] = field(init=False, default=())

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "keys", tuple(k.lower() for k in (self.condition, *self.aliases)),
        )


def _same(dosage: Optional[str], duration: str) -> dict[ProtocolSeverity, Dosing]:
    return {_MODERATE: Dosing(dosage, duration)}


_OUTPATIENT_UNLESS_SEVERE = {
    _MILD: CareSetting.OUTPATIENT,
    _MODERATE: CareSetting.OUTPATIENT,
    _SEVERE: CareSetting.INPATIENT,
}

PROTOCOL_TEMPLATES: tuple[ProtocolTemplate, ...] = (
    ProtocolTemplate(
        condition="Acute Coronary Syndrome",
        aliases=("acs", "stemi", "nstemi", "myocardial infarction", "unstable angina", "I24.9"),
        settings={_MILD: CareSetting.INPATIENT, _MODERATE: CareSetting.INPATIENT, _SEVERE: CareSetting.ICU},
        primary=(
            Intervention(
                "Aspirin", TreatmentType.MEDICATION, EvidenceLevel.A,
                _same("300mg chewed, then 75mg daily", "Indefinite"),
                instructions="Give immediately unless contraindicated",
                contraindications=("Active bleeding", "Severe bleeding risk"),
                side_effects=("GI bleeding", "Tinnitus"),
            ),
            Intervention(
                "Clopidogrel", TreatmentType.MEDICATION, EvidenceLevel.A,
                _same("600mg loading, then 75mg daily", "12 months minimum"),
                instructions="Dual antiplatelet therapy",
                contraindications=("Active bleeding",),
                side_effects=("Bleeding", "Thrombotic thrombocytopenic purpura"),
            ),
            Intervention(
                "Primary PCI", TreatmentType.PROCEDURE, EvidenceLevel.A,
                _same("Within 90 minutes", "Single procedure"),
                instructions="Door-to-balloon time under 90 minutes",
                contraindications=("Patient refusal", "Limited life expectancy"),
                severities=frozenset({_SEVERE}),
                side_effects=("Bleeding", "Contrast nephropathy"),
            ),
        ),
        alternative=(
            Intervention(
                "Tenecteplase", TreatmentType.MEDICATION, EvidenceLevel.A,
                _same("Weight-based single bolus", "Single dose"),
                instructions="If PCI is not available within 120 minutes",
                contraindications=("Recent surgery", "Active bleeding", "Previous stroke"),
                side_effects=("Bleeding", "Intracranial haemorrhage (0.5-1%)"),
            ),
        ),
        monitoring=(
            Monitoring("Cardiac enzymes", "Troponin I/T", "Every 8 hours x 3", "Trending"),
            Monitoring("ECG", "12-lead ECG", "Continuous monitoring", "Resolution of ST changes"),
        ),
        follow_up_interval={_MODERATE: "48-72 hours, then 1 week, 1 month, 3 months"},
        assessment=("Symptom assessment", "Medication compliance", "Lifestyle modifications"),
        red_flags=("Recurrent chest pain", "Heart failure symptoms", "Arrhythmias"),
        complications=(
            Complication(
                "Cardiogenic shock",
                recognition=("Hypotension", "Poor perfusion", "Pulmonary oedema"),
                management="Inotropes, mechanical support, urgent revascularisation",
                escalation="ICU admission, cardiothoracic surgery consultation",
            ),
        ),
        education=(
            "Medication compliance importance",
            "Activity restrictions for 1 week",
            "Cardiac rehabilitation referral",
            "Risk factor modification",
            "When to seek emergency care",
        ),
    ),
    ProtocolTemplate(
        condition="Heart Failure",
        aliases=("congestive cardiac failure", "ccf", "acute heart failure", "I50.9"),
        settings={_MILD: CareSetting.OUTPATIENT, _MODERATE: CareSetting.INPATIENT, _SEVERE: CareSetting.ICU},
        primary=(
            Intervention(
                "Furosemide", TreatmentType.MEDICATION, EvidenceLevel.A,
                {
                    _MILD: Dosing("20-40mg orally daily", "Until euvolaemic"),
                    _MODERATE: Dosing("40-80mg IV", "Until euvolaemic"),
                    _SEVERE: Dosing("80mg IV bolus, then infusion", "Until euvolaemic"),
                },
                instructions="Monitor electrolytes and renal function",
                contraindications=("Anuria", "Severe dehydration"),
                side_effects=("Hypokalaemia", "Renal impairment"),
            ),
            Intervention(
                "Enalapril", TreatmentType.MEDICATION, EvidenceLevel.A,
                _same("2.5mg BD", "Long-term"),
                instructions="Start low, titrate to maximum tolerated",
                contraindications=("Bilateral renal artery stenosis", "Pregnancy"),
                side_effects=("Dry cough", "Hyperkalaemia", "Angioedema"),
            ),
        ),
        alternative=(
            Intervention(
                "Losartan", TreatmentType.MEDICATION, EvidenceLevel.A,
                _same("25mg daily", "Long-term"),
                instructions="If ACE inhibitor is not tolerated",
                contraindications=("Bilateral renal artery stenosis", "Pregnancy"),
                side_effects=("Hyperkalaemia", "Dizziness"),
            ),
        ),
        monitoring=(
            Monitoring("Daily weight", "Calibrated scale", "Daily", "Stable or decreasing"),
            Monitoring("Urea and electrolytes", "Laboratory", "Daily during acute phase", "Stable renal function"),
        ),
        follow_up_interval={_MODERATE: "1 week, then monthly"},
        assessment=("Symptom control", "Medication optimisation", "Fluid status"),
        red_flags=("Worsening dyspnoea", "Weight gain >2kg", "Syncope"),
        complications=(
            Complication(
                "Acute pulmonary oedema",
                recognition=("Severe dyspnoea", "Pink frothy sputum", "Bilateral crepitations"),
                management="High-dose IV diuretics, oxygen, consider non-invasive ventilation",
                escalation="ICU for ventilatory support",
            ),
        ),
        education=(
            "Daily weight monitoring",
            "Fluid restriction 1.5-2L/day",
            "Salt restriction <2g/day",
            "Medication compliance",
            "Exercise as tolerated",
        ),
    ),
    ProtocolTemplate(
        condition="Type 2 Diabetes Mellitus",
        aliases=("type 2 diabetes", "diabetes", "diabetes mellitus", "t2dm", "E11.9"),
        settings=_OUTPATIENT_UNLESS_SEVERE,
        primary=(
            Intervention(
                "Metformin", TreatmentType.MEDICATION, EvidenceLevel.A,
                {
                    _MILD: Dosing("500mg daily with meals", "Long-term"),
                    _MODERATE: Dosing("500mg BD with meals", "Long-term"),
                    _SEVERE: Dosing("1g BD with meals", "Long-term"),
                },
                instructions="Start 500mg daily, increase to BD after 1 week",
                contraindications=("eGFR <30", "Severe heart failure", "Metabolic acidosis"),
                side_effects=("GI upset", "Lactic acidosis (rare)", "Vitamin B12 deficiency"),
            ),
            Intervention(
                "Diabetes education", TreatmentType.LIFESTYLE, EvidenceLevel.A,
                _same("Structured programme", "Ongoing"),
                instructions="Structured diabetes education programme",
            ),
            Intervention(
                "Insulin", TreatmentType.MEDICATION, EvidenceLevel.A,
                _same("Basal insulin 10 units at night, titrate", "Long-term"),
                instructions="Add when HbA1c remains above target on oral therapy",
                contraindications=("Hypoglycaemia",),
                severities=frozenset({_SEVERE}),
                side_effects=("Hypoglycaemia", "Weight gain"),
            ),
        ),
        alternative=(
            Intervention(
                "Gliclazide", TreatmentType.MEDICATION, EvidenceLevel.B,
                _same("40-80mg daily", "Long-term"),
                instructions="If metformin is contraindicated or not tolerated",
                contraindications=("Severe hepatic impairment",),
                side_effects=("Hypoglycaemia", "Weight gain"),
            ),
        ),
        monitoring=(
            Monitoring("HbA1c", "Laboratory", "Every 3 months until target, then 6 monthly", "<7% (<53 mmol/mol)"),
            Monitoring("Blood pressure", "Sphygmomanometer", "Every visit", "<140/90 mmHg"),
        ),
        follow_up_interval={_MODERATE: "1 month initially, then 3 monthly", _SEVERE: "1 week, then monthly"},
        assessment=("Glycaemic control", "Complications screening", "Lifestyle adherence"),
        red_flags=("Hyperglycaemic symptoms", "Ketosis", "Severe hypoglycaemia"),
        complications=(
            Complication(
                "Diabetic ketoacidosis",
                recognition=("Hyperglycaemia", "Ketones", "Acidosis", "Dehydration"),
                management="IV fluids, insulin infusion, electrolyte replacement",
                escalation="Hospital admission, endocrinology consultation",
            ),
            Complication(
                "Severe hypoglycaemia",
                recognition=("Confusion", "Sweating", "Glucose <4 mmol/L"),
                management="Oral glucose if alert, IV dextrose or glucagon if not",
                escalation="Admit if on sulfonylurea or recurrent",
            ),
        ),
        education=(
            "Blood glucose monitoring",
            "Hypoglycaemia recognition and treatment",
            "Foot care",
            "Dietary counselling",
            "Exercise recommendations",
        ),
    ),
    ProtocolTemplate(
        condition="Essential Hypertension",
        aliases=("hypertension", "high blood pressure", "htn", "I10"),
        settings=_OUTPATIENT_UNLESS_SEVERE,
        primary=(
            Intervention(
                "Amlodipine", TreatmentType.MEDICATION, EvidenceLevel.A,
                {
                    _MILD: Dosing("5mg once daily", "Long-term"),
                    _MODERATE: Dosing("5mg once daily", "Long-term"),
                    _SEVERE: Dosing("10mg once daily", "Long-term"),
                },
                contraindications=("Cardiogenic shock",),
                side_effects=("Ankle oedema", "Flushing", "Headache"),
            ),
            Intervention(
                "Lifestyle modification", TreatmentType.LIFESTYLE, EvidenceLevel.A,
                _same(None, "Ongoing"),
                instructions="Sodium restriction, regular exercise, weight management, smoking cessation",
            ),
        ),
        alternative=(
            Intervention(
                "Hydrochlorothiazide", TreatmentType.MEDICATION, EvidenceLevel.A,
                _same("12.5-25mg once daily", "Long-term"),
                contraindications=("Gout", "Hyponatraemia"),
                side_effects=("Hyponatraemia", "Hypokalaemia", "Gout"),
            ),
            Intervention(
                "Enalapril", TreatmentType.MEDICATION, EvidenceLevel.A,
                _same("10mg once daily", "Long-term"),
                contraindications=("Pregnancy", "Bilateral renal artery stenosis"),
                side_effects=("Dry cough", "Hyperkalaemia", "Angioedema"),
            ),
        ),
        monitoring=(
            Monitoring("Blood pressure", "Sphygmomanometer", "Every visit", "<140/90 mmHg"),
            Monitoring("Renal function", "Laboratory", "Annually", "Stable eGFR"),
        ),
        follow_up_interval={_MILD: "3 months", _MODERATE: "1 month", _SEVERE: "1 week"},
        assessment=("Blood pressure control", "Target organ damage", "Adherence"),
        red_flags=("Severe headache", "Chest pain", "Visual disturbance", "BP >180/120 mmHg"),
        complications=(
            Complication(
                "Hypertensive emergency",
                recognition=("BP >180/120 mmHg", "Chest pain", "Neurological deficit", "Visual disturbance"),
                management="Controlled BP reduction with IV agents",
                escalation="Emergency department, high-care admission",
            ),
        ),
        education=("Home blood pressure monitoring", "Reduce salt intake", "Medication adherence"),
    ),
    ProtocolTemplate(
        condition="Community-acquired Pneumonia",
        aliases=("pneumonia", "cap", "chest infection", "J18.9"),
        settings=_OUTPATIENT_UNLESS_SEVERE,
        primary=(
            Intervention(
                "Amoxicillin", TreatmentType.MEDICATION, EvidenceLevel.A,
                {
                    _MILD: Dosing("1g TDS orally", "5 days"),
                    _MODERATE: Dosing("1g TDS orally", "5-7 days"),
                },
                contraindications=("Penicillin allergy",),
                severities=frozenset({_MILD, _MODERATE}),
                side_effects=("Diarrhoea", "Rash"),
            ),
            Intervention(
                "Ceftriaxone", TreatmentType.MEDICATION, EvidenceLevel.A,
                _same("1-2g IV daily", "5-7 days"),
                instructions="Step down to oral therapy once clinically stable",
                contraindications=("Severe cephalosporin allergy",),
                severities=frozenset({_SEVERE}),
                side_effects=("Diarrhoea", "Injection site pain"),
            ),
            Intervention(
                "Supportive care", TreatmentType.SUPPORTIVE, EvidenceLevel.C,
                _same(None, "Until recovery"),
                instructions="Oxygen to keep saturation above 92%, fluids, antipyretics",
            ),
        ),
        alternative=(
            Intervention(
                "Azithromycin", TreatmentType.MEDICATION, EvidenceLevel.B,
                _same("500mg daily", "3 days"),
                instructions="If penicillin allergic or atypical cover needed",
                contraindications=("QT prolongation",),
                side_effects=("GI upset", "QT prolongation"),
            ),
        ),
        monitoring=(
            Monitoring("Oxygen saturation", "Pulse oximetry", "Every 4 hours", ">92%"),
            Monitoring("Temperature", "Thermometer", "Every 4 hours", "<37.5°C"),
        ),
        follow_up_interval={_MODERATE: "48 hours, then 6 weeks"},
        assessment=("Clinical response", "Chest X-ray resolution at 6 weeks if smoker or over 50"),
        red_flags=("Confusion", "Respiratory rate >30", "Hypotension", "Worsening breathlessness"),
        complications=(
            Complication(
                "Sepsis",
                recognition=("Hypotension", "Tachycardia", "Confusion", "Raised lactate"),
                management="IV antibiotics within 1 hour, fluid resuscitation",
                escalation="High-care or ICU admission",
            ),
            Complication(
                "Parapneumonic effusion",
                recognition=("Persistent fever", "Dullness to percussion", "Pleuritic pain"),
                management="Chest X-ray and ultrasound, diagnostic tap",
                escalation="Refer for drainage if empyema",
            ),
        ),
        education=("Complete the antibiotic course", "Rest and fluids", "Return if breathing worsens"),
    ),
    ProtocolTemplate(
        condition="Cough-variant Asthma",
        aliases=("asthma", "J45.9"),
        settings=_OUTPATIENT_UNLESS_SEVERE,
        primary=(
            Intervention(
                "Salbutamol inhaler", TreatmentType.MEDICATION, EvidenceLevel.A,
                {
                    _MILD: Dosing("100-200mcg as needed", "As needed"),
                    _MODERATE: Dosing("200mcg as needed", "As needed"),
                    _SEVERE: Dosing("5mg nebulised every 20 minutes", "First hour, then reassess"),
                },
                instructions="Check inhaler technique",
                side_effects=("Tremor", "Palpitations"),
            ),
            Intervention(
                "Budesonide inhaler", TreatmentType.MEDICATION, EvidenceLevel.A,
                {
                    _MILD: Dosing("200mcg BD", "8 weeks, then review"),
                    _MODERATE: Dosing("400mcg BD", "8 weeks, then review"),
                },
                instructions="Rinse mouth after use",
                severities=frozenset({_MILD, _MODERATE}),
                side_effects=("Oral thrush", "Hoarse voice"),
            ),
            Intervention(
                "Prednisone", TreatmentType.MEDICATION, EvidenceLevel.A,
                _same("40mg daily", "5 days"),
                contraindications=("Active untreated infection",),
                severities=frozenset({_SEVERE}),
                side_effects=("Hyperglycaemia", "Mood change", "Insomnia"),
            ),
        ),
        alternative=(
            Intervention(
                "Beclomethasone inhaler", TreatmentType.MEDICATION, EvidenceLevel.A,
                _same("200mcg BD", "8 weeks, then review"),
                side_effects=("Oral thrush", "Hoarse voice"),
            ),
        ),
        monitoring=(
            Monitoring("Peak expiratory flow", "Peak flow meter", "Twice daily", ">80% of personal best"),
        ),
        follow_up_interval={_MILD: "6 weeks", _MODERATE: "4 weeks", _SEVERE: "48 hours after discharge"},
        assessment=("Symptom control", "Inhaler technique", "Trigger avoidance"),
        red_flags=("Unable to complete sentences", "Reliever needed more than 4-hourly", "Silent chest"),
        complications=(
            Complication(
                "Acute severe asthma",
                recognition=("Unable to complete sentences", "Peak flow <50% of best", "Silent chest"),
                management="Oxygen, nebulised salbutamol and ipratropium, systemic steroids",
                escalation="Emergency department, consider ICU",
            ),
        ),
        education=("Inhaler technique", "Written asthma action plan", "Avoid identified triggers"),
    ),
    ProtocolTemplate(
        condition="Urinary Tract Infection",
        aliases=("uti", "cystitis", "bladder infection", "N39.0"),
        settings=_OUTPATIENT_UNLESS_SEVERE,
        primary=(
            Intervention(
                "Nitrofurantoin", TreatmentType.MEDICATION, EvidenceLevel.A,
                _same("100mg BD", "5 days"),
                contraindications=("eGFR <45", "Late pregnancy"),
                severities=frozenset({_MILD, _MODERATE}),
                side_effects=("Nausea", "Brown urine"),
            ),
            Intervention(
                "Ceftriaxone", TreatmentType.MEDICATION, EvidenceLevel.A,
                _same("1g IV daily", "Until afebrile, then oral step-down"),
                instructions="For suspected pyelonephritis or urosepsis",
                severities=frozenset({_SEVERE}),
                side_effects=("Diarrhoea", "Injection site pain"),
            ),
        ),
        alternative=(
            Intervention(
                "Ciprofloxacin", TreatmentType.MEDICATION, EvidenceLevel.B,
                _same("500mg BD", "3 days"),
                contraindications=("Pregnancy",),
                side_effects=("Tendon rupture", "GI upset"),
            ),
        ),
        monitoring=(
            Monitoring("Urine culture", "Laboratory", "Before antibiotics", "Organism and sensitivities"),
        ),
        follow_up_interval={_MODERATE: "If symptoms persist after 48 hours"},
        assessment=("Symptom resolution", "Culture result review"),
        red_flags=("Fever with loin pain", "Rigors", "Vomiting"),
        complications=(
            Complication(
                "Pyelonephritis",
                recognition=("Fever", "Loin pain", "Rigors"),
                management="Switch to IV antibiotics per culture",
                escalation="Admit if vomiting or septic",
            ),
        ),
        education=("Adequate fluid intake", "Complete the antibiotic course"),
    ),
    ProtocolTemplate(
        condition="Acute Gastroenteritis",
        aliases=("gastroenteritis", "diarrhoea", "diarrhea", "A09"),
        settings=_OUTPATIENT_UNLESS_SEVERE,
        primary=(
            Intervention(
                "Oral rehydration solution", TreatmentType.SUPPORTIVE, EvidenceLevel.A,
                _same("200-400ml after each loose stool", "Until diarrhoea settles"),
                severities=frozenset({_MILD, _MODERATE}),
            ),
            Intervention(
                "IV fluids", TreatmentType.SUPPORTIVE, EvidenceLevel.A,
                _same("Ringer's lactate per dehydration deficit", "Until able to drink"),
                severities=frozenset({_SEVERE}),
                side_effects=("Fluid overload",),
            ),
        ),
        monitoring=(
            Monitoring("Hydration status", "Clinical assessment", "Every visit", "Normal skin turgor, passing urine"),
        ),
        follow_up_interval={_MODERATE: "48 hours if not improving"},
        assessment=("Hydration", "Stool frequency"),
        red_flags=("Blood in stool", "Persistent vomiting", "Reduced urine output", "Drowsiness"),
        complications=(
            Complication(
                "Severe dehydration",
                recognition=("Lethargy", "Sunken eyes", "Reduced urine output"),
                management="IV Ringer's lactate per deficit",
                escalation="Admit for IV rehydration",
            ),
        ),
        education=("Hand hygiene", "Small frequent fluids", "Return if unable to keep fluids down"),
    ),
    ProtocolTemplate(
        condition="Migraine",
        aliases=("migraine headache", "G43.9"),
        settings={_MILD: CareSetting.OUTPATIENT, _MODERATE: CareSetting.OUTPATIENT, _SEVERE: CareSetting.OUTPATIENT},
        primary=(
            Intervention(
                "Ibuprofen", TreatmentType.MEDICATION, EvidenceLevel.A,
                _same("400mg at onset", "Per attack"),
                contraindications=("Peptic ulcer disease", "Renal impairment"),
                side_effects=("Dyspepsia", "GI bleeding"),
            ),
            Intervention(
                "Paracetamol", TreatmentType.MEDICATION, EvidenceLevel.B,
                _same("1g at onset", "Per attack"),
                side_effects=("Hepatotoxicity in overdose",),
            ),
        ),
        alternative=(
            Intervention(
                "Sumatriptan", TreatmentType.MEDICATION, EvidenceLevel.A,
                _same("50-100mg at onset", "Per attack"),
                contraindications=("Ischaemic heart disease", "Uncontrolled hypertension"),
                side_effects=("Chest tightness", "Tingling", "Drowsiness"),
            ),
        ),
        follow_up_interval={_MODERATE: "3 months"},
        assessment=("Headache diary review", "Medication overuse"),
        red_flags=("Thunderclap onset", "Neurological deficit", "Fever with neck stiffness"),
        complications=(
            Complication(
                "Status migrainosus",
                recognition=("Attack lasting over 72 hours", "Persistent vomiting"),
                management="Parenteral antiemetic and analgesia, hydration",
                escalation="Emergency department if refractory",
            ),
        ),
        education=("Keep a headache diary", "Avoid analgesic overuse", "Identify triggers"),
    ),
)

# Returned, with the requested condition name, when nothing matches.
GENERIC_TEMPLATE = ProtocolTemplate(
    condition="Generic supportive care",
    aliases=(),
    settings=_OUTPATIENT_UNLESS_SEVERE,
    primary=(
        Intervention(
            "Symptomatic relief", TreatmentType.SUPPORTIVE, EvidenceLevel.D,
            _same(None, "As needed"),
            instructions="Treat symptoms; establish a definitive diagnosis",
        ),
        Intervention(
            "Paracetamol", TreatmentType.MEDICATION, EvidenceLevel.C,
            _same("1g every 6 hours as needed (max 4g/day)", "As needed"),
            contraindications=("Severe hepatic impairment",),
            side_effects=("Hepatotoxicity in overdose",),
        ),
    ),
    monitoring=(
        Monitoring("Vital signs", "Clinical observation", "Every visit", "Within normal limits"),
    ),
    follow_up_interval={_MILD: "1-2 weeks", _MODERATE: "1 week", _SEVERE: "24-48 hours"},
    assessment=("Symptom progression", "Response to treatment", "Diagnostic clarification"),
    red_flags=("Rapid deterioration", "New or worsening symptoms"),
    education=("Return if symptoms worsen", "Follow prescribed treatment plan"),
)
