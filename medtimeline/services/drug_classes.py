"""
Drug Class Table - Pharmacological classes used to judge therapy switches
"""
import re
from typing import Dict, List, Set

# generic name -> classes, most specific first
DRUG_CLASSES: Dict[str, List[str]] = {
    # Statins / lipid
    'atorvastatin': ['statin', 'lipid_lowering'],
    'rosuvastatin': ['statin', 'lipid_lowering'],
    'simvastatin': ['statin', 'lipid_lowering'],
    'pravastatin': ['statin', 'lipid_lowering'],
    'lovastatin': ['statin', 'lipid_lowering'],
    'fluvastatin': ['statin', 'lipid_lowering'],
    'pitavastatin': ['statin', 'lipid_lowering'],
    'fenofibrate': ['fibrate', 'lipid_lowering'],
    'gemfibrozil': ['fibrate', 'lipid_lowering'],
    'ezetimibe': ['cholesterol_absorption_inhibitor', 'lipid_lowering'],

    # Antiplatelets / anticoagulants
    'aspirin': ['antiplatelet', 'nsaid'],
    'clopidogrel': ['antiplatelet', 'p2y12_inhibitor'],
    'ticagrelor': ['antiplatelet', 'p2y12_inhibitor'],
    'prasugrel': ['antiplatelet', 'p2y12_inhibitor'],
    'warfarin': ['vitamin_k_antagonist', 'anticoagulant'],
    'acenocoumarol': ['vitamin_k_antagonist', 'anticoagulant'],
    'heparin': ['heparin', 'anticoagulant'],
    'enoxaparin': ['lmwh', 'anticoagulant'],
    'rivaroxaban': ['doac', 'anticoagulant'],
    'apixaban': ['doac', 'anticoagulant'],
    'dabigatran': ['doac', 'anticoagulant'],

    # Antibiotics
    'ceftazidime': ['cephalosporin', 'beta_lactam', 'antibiotic'],
    'ceftriaxone': ['cephalosporin', 'beta_lactam', 'antibiotic'],
    'cefotaxime': ['cephalosporin', 'beta_lactam', 'antibiotic'],
    'cefoperazone': ['cephalosporin', 'beta_lactam', 'antibiotic'],
    'cefepime': ['cephalosporin', 'beta_lactam', 'antibiotic'],
    'cefuroxime': ['cephalosporin', 'beta_lactam', 'antibiotic'],
    'cefixime': ['cephalosporin', 'beta_lactam', 'antibiotic'],
    'cefpodoxime': ['cephalosporin', 'beta_lactam', 'antibiotic'],
    'cefazolin': ['cephalosporin', 'beta_lactam', 'antibiotic'],
    'cephalexin': ['cephalosporin', 'beta_lactam', 'antibiotic'],
    'amoxicillin': ['penicillin', 'beta_lactam', 'antibiotic'],
    'ampicillin': ['penicillin', 'beta_lactam', 'antibiotic'],
    'piperacillin': ['penicillin', 'beta_lactam', 'antibiotic'],
    'meropenem': ['carbapenem', 'beta_lactam', 'antibiotic'],
    'imipenem': ['carbapenem', 'beta_lactam', 'antibiotic'],
    'ciprofloxacin': ['fluoroquinolone', 'antibiotic'],
    'levofloxacin': ['fluoroquinolone', 'antibiotic'],
    'moxifloxacin': ['fluoroquinolone', 'antibiotic'],
    'ofloxacin': ['fluoroquinolone', 'antibiotic'],
    'azithromycin': ['macrolide', 'antibiotic'],
    'clarithromycin': ['macrolide', 'antibiotic'],
    'erythromycin': ['macrolide', 'antibiotic'],
    'vancomycin': ['glycopeptide', 'antibiotic'],
    'metronidazole': ['nitroimidazole', 'antibiotic'],

    # Antihypertensives
    'amlodipine': ['calcium_channel_blocker', 'antihypertensive'],
    'nifedipine': ['calcium_channel_blocker', 'antihypertensive'],
    'losartan': ['arb', 'antihypertensive'],
    'telmisartan': ['arb', 'antihypertensive'],
    'valsartan': ['arb', 'antihypertensive'],
    'irbesartan': ['arb', 'antihypertensive'],
    'enalapril': ['ace_inhibitor', 'antihypertensive'],
    'perindopril': ['ace_inhibitor', 'antihypertensive'],
    'lisinopril': ['ace_inhibitor', 'antihypertensive'],
    'captopril': ['ace_inhibitor', 'antihypertensive'],
    'bisoprolol': ['beta_blocker', 'antihypertensive'],
    'metoprolol': ['beta_blocker', 'antihypertensive'],
    'carvedilol': ['beta_blocker', 'antihypertensive'],
    'furosemide': ['loop_diuretic', 'diuretic'],
    'hydrochlorothiazide': ['thiazide', 'diuretic'],
    'indapamide': ['thiazide', 'diuretic'],
    'spironolactone': ['potassium_sparing', 'diuretic'],

    # Diabetes
    'metformin': ['biguanide', 'antidiabetic'],
    'gliclazide': ['sulfonylurea', 'antidiabetic'],
    'glimepiride': ['sulfonylurea', 'antidiabetic'],
    'sitagliptin': ['dpp4_inhibitor', 'antidiabetic'],
    'vildagliptin': ['dpp4_inhibitor', 'antidiabetic'],
    'linagliptin': ['dpp4_inhibitor', 'antidiabetic'],
    'empagliflozin': ['sglt2_inhibitor', 'antidiabetic'],
    'dapagliflozin': ['sglt2_inhibitor', 'antidiabetic'],
    'insulin': ['insulin', 'antidiabetic'],

    # Acid reducers
    'omeprazole': ['ppi', 'acid_reducer'],
    'esomeprazole': ['ppi', 'acid_reducer'],
    'pantoprazole': ['ppi', 'acid_reducer'],
    'rabeprazole': ['ppi', 'acid_reducer'],
    'lansoprazole': ['ppi', 'acid_reducer'],
    'famotidine': ['h2_blocker', 'acid_reducer'],

    # Analgesics
    'paracetamol': ['analgesic_antipyretic'],
    'ibuprofen': ['nsaid', 'analgesic'],
    'diclofenac': ['nsaid', 'analgesic'],
    'meloxicam': ['nsaid', 'analgesic'],
    'celecoxib': ['cox2_inhibitor', 'nsaid'],
    'tramadol': ['opioid', 'analgesic'],
    'morphine': ['opioid', 'analgesic'],

    # Corticosteroids
    'methylprednisolone': ['corticosteroid'],
    'prednisolone': ['corticosteroid'],
    'dexamethasone': ['corticosteroid'],
    'hydrocortisone': ['corticosteroid'],
}

# Umbrella classes too broad to call two drugs interchangeable
BROAD_CLASSES: Set[str] = {
    'antibiotic', 'beta_lactam', 'antihypertensive', 'antidiabetic', 'diuretic',
    'lipid_lowering', 'anticoagulant', 'analgesic', 'acid_reducer', 'nsaid',
}

BRAND_TO_GENERIC: Dict[str, str] = {
    'plavix': 'clopidogrel',
    'brilinta': 'ticagrelor',
    'lipitor': 'atorvastatin',
    'crestor': 'rosuvastatin',
    'zocor': 'simvastatin',
    'mevacor': 'lovastatin',
    'rocephin': 'ceftriaxone',
    'fortum': 'ceftazidime',
    'tazicef': 'ceftazidime',
    'augmentin': 'amoxicillin',
    'zinnat': 'cefuroxime',
    'tavanic': 'levofloxacin',
    'glucophage': 'metformin',
    'diamicron': 'gliclazide',
    'amaryl': 'glimepiride',
    'januvia': 'sitagliptin',
    'galvus': 'vildagliptin',
    'jardiance': 'empagliflozin',
    'forxiga': 'dapagliflozin',
    'coversyl': 'perindopril',
    'concor': 'bisoprolol',
    'amlor': 'amlodipine',
    'nexium': 'esomeprazole',
    'lovenox': 'enoxaparin',
    'xarelto': 'rivaroxaban',
    'efferalgan': 'paracetamol',
    'panadol': 'paracetamol',
    'medrol': 'methylprednisolone',
    'solu-medrol': 'methylprednisolone',
}

_STRENGTH_PATTERN = re.compile(r'\d+(?:[.,]\d+)?\s*(?:mg|mcg|µg|g|ml|iu|ui|%)\b', re.IGNORECASE)
_FORM_WORDS = ('tablet', 'capsule', 'syrup', 'injection', 'cream', 'ointment', 'viên', 'ống', 'gói')


def normalize_drug_name(name: str) -> str:
    """Lowercase drug name without strength or dosage form"""
    name = (name or '').lower().strip()
    name = _STRENGTH_PATTERN.sub(' ', name)
    for word in _FORM_WORDS:
        name = name.replace(word, ' ')
    return ' '.join(name.split())


def resolve_generic(name: str) -> str:
    """Best-effort generic name: table key or brand mapping found in the name"""
    normalized = normalize_drug_name(name)
    if normalized in DRUG_CLASSES:
        return normalized

    tokens = re.split(r'[\s/+(),-]+', normalized)
    for token in tokens:
        if token in DRUG_CLASSES:
            return token
        if token in BRAND_TO_GENERIC:
            return BRAND_TO_GENERIC[token]

    # Partial match, e.g. "atorvastatine"
    for drug in DRUG_CLASSES:
        if any(len(token) >= 5 and drug in token for token in tokens):
            return drug

    return normalized


def get_drug_classes(name: str) -> List[str]:
    """Classes of a medication, most specific first; empty when unknown"""
    return list(DRUG_CLASSES.get(resolve_generic(name), []))
