"""X-Contentful-User-Agent signature formatting."""

from contentful_cda.environment import RuntimeEnvironment, detect_environment


def get_user_agent_header(
    sdk: str,
    application: str | None = None,
    integration: str | None = None,
    environment: RuntimeEnvironment | None = None,
) -> str:
    """
    Compose the signature Contentful uses to attribute API traffic.

    Example: ``"app blog/1.0.0; sdk contentful-cda.py/0.1.0; platform cpython/3.12.1; os Linux;"``
    """
    env = environment or detect_environment()
    parts: list[str] = []
    if application:
        parts.append(f"app {application}")
    if integration:
        parts.append(f"integration {integration}")
    parts.append(f"sdk {sdk}")
    parts.append(f"platform {env.runtime}")
    if env.os_name:
        parts.append(f"os {env.os_name}")
    return "; ".join(parts) + ";"
