from upload_relay.config import Settings


def upstream_auth_headers(settings: Settings) -> dict[str, str]:
    """Credentials attached to the outbound upload.

    Empty unless UPSTREAM_AUTHORIZATION is configured; the upstream then
    receives no Authorization header at all.
    """
    if not settings.upstream_authorization:
        return {}
    return {"Authorization": settings.upstream_authorization}
