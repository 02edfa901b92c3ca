"""
Healthcare Service Taxonomy

Predefined categories of healthcare services, each grouping a set of system
tags. Content filters can name whole categories; they are expanded into the
categories' tags before querying.

    expand_healthcare_categories(["Finances & Insurance", "Legal & Advocacy"])
    → ["Finances & Insurance", "Advocacy", "Legal Aid", "Adoption, Foster Care & CYF"]
"""

from dataclasses import dataclass
from typing import Iterable, Sequence


@dataclass(frozen=True)
class HealthcareCategory:
    """A named group of healthcare service tags with display metadata."""

    name: str
    description: str
    color: str
    icon: str
    tags: tuple[str, ...]


HEALTHCARE_CATEGORIES: tuple[HealthcareCategory, ...] = (
    HealthcareCategory(
        name="Medical & Healthcare Services",
        description="Core medical services and healthcare professionals",
        color="#dc2626",
        icon="🏥",
        tags=(
            "Doctors/Physicians",
            "Hospital & Medical Facilities",
            "Medical Procedures, Tests & Surgery",
            "Medications/Pharmacy",
            "Wound Care",
            "Pain & Symptom Management",
            "Diagnosis/Disease Specific",
            "Palliative & Hospice Care",
            "Emergency Care",
            "Medical Decision-Making",
            "Diagnosis/Disease-Specific resources",
            "Rehabilitation Therapy",
        ),
    ),
    HealthcareCategory(
        name="Mental Health & Supportive Programs",
        description="Mental health, behavioral support, and therapeutic programs",
        color="#7c3aed",
        icon="🧠",
        tags=(
            "Mental Health & Wellness",
            "Behavioral Support",
            "Grief/Bereavement Support",
            "Psychosocial Care & Creative Arts Therapy",
            "Sibling Support",
            "Crisis Care",
            "Camps",
            "Recreation",
            "Wish Granting Organizations",
        ),
    ),
    HealthcareCategory(
        name="Home & Community-Based Care",
        description="Home healthcare services and community-based support",
        color="#059669",
        icon="🏠",
        tags=(
            "Home Healthcare",
            "Case Management/Care Coordination",
            "Respite Care",
            "Home Modifications & Accessibility",
            "Medical Equipment & Supportive Technology",
        ),
    ),
    HealthcareCategory(
        name="Medical Supplies & Equipment",
        description="Medical devices, adaptive equipment, and technology",
        color="#2563eb",
        icon="🔧",
        tags=(
            "Medical Supplies & Equipment",
            "Adaptive Care Equipment & Technology",
            "Communication Devices",
        ),
    ),
    HealthcareCategory(
        name="Basic Needs & Daily Living",
        description="Essential daily living support and basic needs",
        color="#ea580c",
        icon="🛡️",
        tags=(
            "Basic Human Needs (Food, Clothing, Housing, Goods)",
            "Transportation",
            "Nutrition & Feeding",
        ),
    ),
    HealthcareCategory(
        name="Finances & Insurance",
        description="Financial assistance, insurance, and billing support",
        color="#16a34a",
        icon="💰",
        tags=("Finances & Insurance",),
    ),
    HealthcareCategory(
        name="Legal & Advocacy",
        description="Legal services, advocacy, and protective services",
        color="#0891b2",
        icon="⚖️",
        tags=(
            "Advocacy",
            "Legal Aid",
            "Adoption, Foster Care & CYF",
        ),
    ),
    HealthcareCategory(
        name="Education & Employment",
        description="Educational services and employment support",
        color="#7c2d12",
        icon="📚",
        tags=(
            "Education",
            "Employment",
            "Early Intervention/Developmental Services",
        ),
    ),
)


def expand_healthcare_categories(
    names: Iterable[str],
    categories: Sequence[HealthcareCategory] = HEALTHCARE_CATEGORIES,
) -> list[str]:
    """
    Return the tags of every named category, in taxonomy order.

    Unknown category names are ignored. Duplicate tags are kept once.
    """
    wanted = set(names)
    tags: list[str] = []
    for category in categories:
        if category.name in wanted:
            tags.extend(tag for tag in category.tags if tag not in tags)
    return tags
