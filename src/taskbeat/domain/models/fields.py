"""Field-name sets governing which payload keys are accepted and which are masked."""

MASK_TOKEN = "[CONCEALED]"

ALLOWED_FIELDS: frozenset[str] = frozenset(
    {
        "patientName",
        "ssn",
        "dob",
        "address",
        "email",
        "phone",
        "diagnosis",
        "insuranceNumber",
        "medicalRecordNumber",
    }
)

# Ordered so masking and its log records are deterministic.
SENSITIVE_FIELDS: tuple[str, ...] = (
    "patientName",
    "ssn",
    "dob",
    "address",
    "email",
    "phone",
    "insuranceNumber",
    "medicalRecordNumber",
    "diagnosis",
)
