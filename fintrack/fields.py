"""Profile form field names shared by the API schemas and the client."""

# Field names as the client sends them, in form order
REQUIRED_SCALAR_FIELDS = (
    "fullName",
    "phone",
    "dob",
    "gender",
    "maritalStatus",
    "occupation",
    "annualIncome",
    "investmentExperience",
    "riskTolerance",
)
REQUIRED_MULTI_FIELDS = ("goals", "preferredCommunication")
