import enum


class ProviderCategory(str, enum.Enum):
    EDUCATIONAL = "EDUCATIONAL"
    HIGHER_EDUCATION = "HIGHER_EDUCATION"
    COACHING = "COACHING"
    FITNESS_SPORTS = "FITNESS_SPORTS"
    OTHER = "OTHER"


CATEGORY_LABELS = {
    ProviderCategory.EDUCATIONAL: "Schools",
    ProviderCategory.HIGHER_EDUCATION: "Colleges & Universities",
    ProviderCategory.COACHING: "Coaching & Test Prep",
    ProviderCategory.FITNESS_SPORTS: "Fitness & Sports",
    ProviderCategory.OTHER: "Other Institutions",
}


class WizardStep(str, enum.Enum):
    CATEGORY = "category"
    REGION = "region"
    PROVIDER = "provider"
    MEMBER = "member"
    REVIEW = "review"


WIZARD_STEPS = list(WizardStep)
