# app/services/jobs/catalog.py
"""
Fixed vocabularies shared by job posting, search, autofill and presentation.
"""

JOB_STATUSES = ("pending_review", "open", "on_hold", "shortlisted", "awarded", "closed")
# Statuses the owning employer may set directly; the rest are admin/workflow driven
OWNER_SETTABLE_STATUSES = ("open", "closed", "on_hold")
# Statuses a public job must have to appear in search
SEARCHABLE_STATUSES = ("open", "shortlisted", "awarded")

VISIBILITIES = ("public", "private")
EMPLOYMENT_TYPES = ("full_time", "contract", "temp")
REMOTE_POLICIES = ("on_site", "hybrid", "remote")
CURRENCIES = ("ILS", "USD", "EUR", "GBP", "INR")
DEFAULT_CURRENCY = "ILS"

SENIORITY_LEVELS = ("junior", "mid_level", "senior", "lead_principal", "manager_director", "vp_c_level")
LEGACY_SENIORITY = {"mid": "mid_level", "lead": "lead_principal", "exec": "vp_c_level"}

SENIORITY_LABELS = {
    "junior": "Junior",
    "mid_level": "Mid-Level",
    "senior": "Senior",
    "lead_principal": "Lead / Principal",
    "manager_director": "Manager / Director",
    "vp_c_level": "VP / C-Level",
    # legacy codes
    "mid": "Mid-Level",
    "lead": "Lead / Principal",
    "exec": "VP / C-Level",
}

JOB_TITLES = (
    "Software Engineer",
    "Backend Engineer",
    "Frontend Engineer",
    "Full-Stack Engineer",
    "DevOps Engineer",
    "Data Scientist",
    "Data Engineer",
    "Product Manager",
    "QA Engineer",
    "Mobile Developer",
    "SRE",
    "Algorithm Engineer",
    "Cybersecurity Engineer",
    "Project Manager",
    "Finance Manager",
    "Sales Manager",
    "Marketing Manager",
    "Customer Success Manager",
    "HR BP",
    "Office Manager",
    "Lab Tech",
    "Research Scientist",
    "Regulatory Affairs",
    "Clinical PM",
    "Mechanical Engineer",
    "Electrical Engineer",
    "Civil Engineer",
    "Other",
)

INDUSTRIES = (
    "Software/Tech",
    "Biotech/Healthcare",
    "Finance/Fintech",
    "Energy/Cleantech",
    "AI / Data Science",
    "Cybersecurity",
    "Semiconductors / Hardware",
    "Telecom / Networking",
    "Public/Non-profit",
    "Other",
)

HOLD_REASONS = (
    "Budget constraints",
    "Waiting for approvals",
    "Position no longer urgent",
    "Restructuring in progress",
    "Candidate pipeline issue",
    "Other",
)
LEGACY_HOLD_PLACEHOLDER = "No reason recorded (job was put on hold before tracking was implemented)"

EXCLUSIVITY_DAYS = 14
