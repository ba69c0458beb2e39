"""Small on-disk datasets shared by the end-to-end tests."""

import json
from pathlib import Path

SYMPTOMS_CSV = """Disease,Symptom_1,Symptom_2,Symptom_3
Flu, fever, cough, headache
Flu, fever, chills,
Cold, sneezing, cough,
Allergy, sneezing, itchy eyes,
Allergy, rash,,
"""

SYMPTOMS_CONFIG = {
    "label": "Disease",
    "labelType": "string",
    "attributeMap": {
        "Symptom_1": "Symptom_1",
        "Symptom_2": "Symptom_2",
        "Symptom_3": {"name": "Symptom_3", "type": "string"},
    },
    "attributeDir": "vertical",
}

STROKE_CSV = """id,age,hypertension,avg_glucose_level,bmi,stroke
9046,67,0,228.69,36.6,1
51676,61,0,202.21,N/A,1
31112,80,1,105.92,32.5,1
60182,49,0,171.23,34.4,0
1665,79,1,174.12,24,0
56669,81,0,186.21,29,0
"""

STROKE_CONFIG = {
    "label": "stroke",
    "labelType": "number",
    "shape": "tabular",
    "excludeColumns": ["id"],
}

LISTED_CSV = """flu,fever,cough,headache
flu,fever,chills
cold,sneezing,cough
allergy,sneezing,itchy eyes,_
"""

GENDER_CSV = """gender,bmi,stroke
Male,30,1
Female,22,0
Female,27.5,1
"""

GENDER_CONFIG = {
    "label": "stroke",
    "labelType": "number",
    "shape": "tabular",
    "attributeMap": {
        "gender": "gender",
        "bmi": {"name": "bmi", "type": "number"},
    },
}



def write_dataset(root: Path, name: str, csv_text: str, config: dict) -> Path:
    folder = root / name
    folder.mkdir(parents=True, exist_ok=True)
    (folder / "dataset.csv").write_text(csv_text, encoding="utf-8")
    (folder / "datasetConfig.json").write_text(json.dumps(config), encoding="utf-8")
    return folder