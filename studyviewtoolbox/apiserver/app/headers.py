from typing import TypedDict

from secure import Secure
from secure.headers import (
    CacheControl,
    ContentSecurityPolicy,
    CrossOriginOpenerPolicy,
    ReferrerPolicy,
    Server,
    StrictTransportSecurity,
    XContentTypeOptions,
    XFrameOptions,
    PermissionsPolicy
)


class HeadersParameters(TypedDict, total=False):
    cache: CacheControl
    coop: CrossOriginOpenerPolicy
    hsts: StrictTransportSecurity
    referrer: ReferrerPolicy
    server: Server
    xcto: XContentTypeOptions
    xfo: XFrameOptions


headers_parameters: HeadersParameters = {
    'cache': CacheControl().no_store(),
    'coop': CrossOriginOpenerPolicy().same_origin(),
    'hsts': StrictTransportSecurity().max_age(31536000),
    'referrer': ReferrerPolicy().no_referrer(),
    'server': Server().set(''),
    'xcto': XContentTypeOptions().nosniff(),
    'xfo': XFrameOptions().deny(),
}

# The interactive documentation pages load their bundles from a CDN.
csp_api = ContentSecurityPolicy().default_src("'none'").frame_ancestors("'none'")
csp_docs = ContentSecurityPolicy().default_src(
        "'self'"
    ).script_src(
        "'self'", "https://cdn.jsdelivr.net"
    ).style_src(
        "'self'", "'unsafe-inline'", "https://cdn.jsdelivr.net"
    ).img_src(
        "'self'", "data:", "https://fastapi.tiangolo.com"
    ).object_src("'none'")
permissions_policy = PermissionsPolicy().geolocation().camera().microphone()

secure_headers = Secure(**headers_parameters, csp=csp_api, permissions=permissions_policy)
secure_headers_docs = Secure(**headers_parameters, csp=csp_docs, permissions=permissions_policy)

DOCUMENTATION_PATHS = ('/docs', '/redoc', '/openapi.json')


def headers_for_path(path: str) -> Secure:
    if path.startswith(DOCUMENTATION_PATHS):
        return secure_headers_docs
    return secure_headers
