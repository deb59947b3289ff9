from app.ssn_authority.client import SsnAuthorityClient, SsnValidationResult  # noqa: F401
