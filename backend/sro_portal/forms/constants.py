"""Fixed option lists and document names used by the activity request form."""
import enum


class FormMode(str, enum.Enum):
    create = "create"
    edit = "edit"
    admin = "admin"


class Section(str, enum.Enum):
    general_info = "general-info"
    date_info = "date-info"
    specifications = "specifications"
    submission = "submission"


SECTION_ORDER = [
    Section.general_info,
    Section.date_info,
    Section.specifications,
    Section.submission,
]

YES_NO = ("yes", "no")
RECURRENCE = ("one-time", "recurring")

ACTIVITY_TYPES = {
    "charitable": "Charitable",
    "serviceWithinUPB": "Service (within UPB)",
    "serviceOutsideUPB": "Service (outside UPB)",
    "contestWithinUPB": "Contest (within UPB)",
    "contestOutsideUPB": "Contest (outside UPB)",
    "educational": "Educational (forum, seminar, exhibits, etc.)",
    "incomeGenerating": "Income-Generating Project",
    "massOrientation": "Mass Orientation/General Assembly",
    "booth": "Booth (membership, registration, ticket payment, etc.)",
    "rehearsals": "Rehearsals/Preparation",
    "specialEvents": "Special Events (anniversary, concert, etc.)",
    "others": "Others",
}

SDG_GOALS = {
    "noPoverty": "No Poverty",
    "zeroHunger": "Zero Hunger",
    "goodHealth": "Good Health and Well-Being",
    "qualityEducation": "Quality Education",
    "genderEquality": "Gender Equality",
    "cleanWater": "Clean Water and Sanitation",
    "affordableEnergy": "Affordable and Clean Energy",
    "decentWork": "Decent Work and Economic Work",
    "industryInnovation": "Industry Innovation and Infrastructure",
    "reducedInequalities": "Reduced Inequalities",
    "sustainableCities": "Sustainable Cities and Communities",
    "responsibleConsumption": "Responsible Consumption and Production",
    "climateAction": "Climate Action",
    "lifeBelowWater": "Life Below Water",
    "lifeOnLand": "Life on Land",
    "peaceJustice": "Peace, Justice and Strong Institutions",
    "partnerships": "Partnerships for the Goals",
}

UNIVERSITY_PARTNERS = {
    "colleges": [
        "College of Science",
        "College of Arts and Communication",
        "College of Social Sciences",
    ],
    "departments": [
        "Department of Biology",
        "Department of Mathematics and Computer Science",
        "Department of Physical Sciences",
        "Human Kinetics Program",
        "Department of Communication",
        "Department of Language, Literature, and the Arts",
        "Department of Anthropology, Sociology, and Psychology",
        "Department of History and Philosophy",
        "Department of Economics and Political Science",
    ],
    "studentAffairs": [
        "Office of Student Affairs (OSA)",
        "Student Relations Office (SRO)",
        "Office of Counselling and Guidance (OCG)",
        "Office of Scholarships and Financial Assistance (OSFA)",
        "UPB Residence Hall (BREHA)",
        "Health Service Office (HSO)",
        "Office of the Auxillary Services (OAS)",
    ],
    "academicAffairs": [
        "Commitee on Culture and Arts (CCA)",
        "Program for Indigenous Cultures (PIC)",
        "Ugnayan ng Pahinungod Baguio",
        "National Service Training Program (NSTP)",
        "University Library",
        "Learning Resource Center (LRC)",
        "Science Research Center (SRC)",
        "Museo Kordilyera",
        "Kasarian Gender Studies Program",
        "Office of Anti-Sexual Harassment",
    ],
    "publicAffairs": [
        "Office of Public Affairs (OPA)",
        "Alumni Relations Office (ARO)",
        "Others",
    ],
}

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

# Required attachments
CONCEPT_PAPER = "Concept Paper"
REQUEST_FORM = "Form 1A (Scanned Copy of Activity Request Form)"
OFF_CAMPUS_NOTICE = "Form 2A (Notice of Off-Campus Activity)"
OFF_CAMPUS_WAIVER = "Form 2B (Waiver for Off-Campus Student Activities), Notarized"
CURFEW_PERMISSION = "Form 3 (Permission to Stay on Campus After 9:00 PM and On Weekends)"

CURFEW_HOUR = 21
ADVANCE_BUSINESS_DAYS = 5
NOT_APPLICABLE = "N/A"
PDF_CONTENT_TYPE = "application/pdf"
