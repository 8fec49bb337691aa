"""AuthWise: authentication and access-control advisor."""

from __future__ import annotations

from personabot.classification import build_classifier, rule
from personabot.dispatch import Generator, RenderRequest, ResponseDispatcher
from personabot.personas.base import Persona, PersonaConfig
from personabot.personas.filters import ToneProfile

NAME = "authwise"

CLASSIFIER = build_classifier(
    "auth_type",
    categories=[
        rule("oauth_sso", "oauth", "sso"),
        rule("jwt_tokens", "jwt", "token"),
        rule("saml_federation", "saml", "federation"),
        rule("multi_factor_auth", "mfa", "2fa", "multi-factor"),
        rule("role_based_access", "rbac", "role", "permission"),
        rule("directory_services", "ldap", "active directory"),
        rule("api_authentication", "api", "key"),
        rule("credential_management", "password", "credential"),
    ],
    default="general_authentication",
    level_name="risk_level",
    levels=[
        rule("high", "breach", "attack", "vulnerability", "exploit", "compromise"),
        rule("medium", "secure", "protect"),
    ],
    default_level="low",
    attributes={
        "security_level": (
            [
                rule("high_security", "enterprise", "government", "financial", "healthcare", "critical"),
                rule("standard_security", "standard", "business"),
                rule("basic_security", "basic", "simple"),
            ],
            "standard_security",
        ),
        "compliance": (
            [
                rule("pci_dss", "pci", "payment"),
                rule("hipaa", "hipaa", "healthcare"),
                rule("gdpr", "gdpr", "privacy"),
                rule("sox", "sox", "financial"),
                rule("iso_27001", "iso", "27001"),
                rule("nist", "nist"),
            ],
            "general_security",
        ),
    },
)

_ADVICE = {
    "oauth_sso": "Use the authorization code flow with PKCE and keep redirect URIs on an exact allow-list.",
    "jwt_tokens": "Keep access tokens short-lived, pin the signing algorithm and rotate refresh tokens on use.",
    "saml_federation": "Validate assertion signatures and audience restrictions, and reject unsigned responses.",
    "multi_factor_auth": "Prefer phishing-resistant factors such as WebAuthn over SMS codes.",
    "role_based_access": "Grant least privilege through roles and review role membership on a schedule.",
    "directory_services": "Bind over LDAPS and scope service accounts to read-only queries.",
    "api_authentication": "Issue scoped API keys, store only their hashes and rotate them regularly.",
    "credential_management": "Hash passwords with a memory-hard algorithm like Argon2 and check them against breach lists.",
}


def _advisor(category: str) -> Generator:
    advice = _ADVICE[category]

    def _gen(request: RenderRequest) -> str:
        cls = request.classification
        text = f"{advice} (security level: {cls.get('security_level')}, compliance: {cls.get('compliance')})"
        if cls.level == "high":
            text = "Treat this as an active incident: revoke exposed credentials first. " + text
        return text

    return _gen


def general_authentication(request: RenderRequest) -> str:
    return (
        "I can help you design authentication: OAuth, JWT, SAML, MFA, RBAC or API keys. "
        "Which part of your system are you securing?"
    )


DISPATCHER = ResponseDispatcher(
    {category: _advisor(category) for category in _ADVICE},
    default=general_authentication,
    name=NAME,
)

CONFIG = PersonaConfig(
    name=NAME,
    display_name="AuthWise",
    tagline="Identity and access security, done right",
    emoji="🔐",
    tone=ToneProfile(agreeableness=5, neuroticism=3, conscientiousness=9, playfulness=2, extraversion=3),
    suggestions={
        "multi_factor_auth": ("Should we compare MFA factor options?",),
        "jwt_tokens": ("Want a token rotation checklist?",),
        "default": ("Would you like a security review checklist?",),
    },
)


def build() -> Persona:
    return Persona(CONFIG, CLASSIFIER, DISPATCHER)
