import ipaddress
import logging
from datetime import timedelta
from typing import Callable, List, Union

from fastapi import Depends, Request, Response, status

from config import ApplicationConfig
from libs.result import Error
from src.api.error import ClientError
from src.app.services.rate_limiter import (
    ANONYMOUS_CLIENT_KEY,
    RateLimitDecision,
    RateLimitPolicy,
    RateLimiter,
)
from src.app.services.unit_of_work import UnitOfWork
from src.depends import get_unit_of_work
from src.domain.entities import RateLimitScope

logger = logging.getLogger(__name__)

IPNetwork = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]


def client_key(request: Request) -> str:
    """
    Forwarded client address, or one shared bucket when none is sent.

    Clients behind a proxy that strips the headers all share the
    anonymous bucket.
    """
    forwarded_for = request.headers.get("x-forwarded-for", "")
    first_hop = forwarded_for.split(",")[0].strip()
    if first_hop:
        return first_hop

    real_ip = request.headers.get("x-real-ip", "").strip()
    if real_ip:
        return real_ip

    return ANONYMOUS_CLIENT_KEY


def trusted_proxy_networks() -> List[IPNetwork]:
    networks = []
    for proxy in ApplicationConfig.TRUSTED_PROXIES.split(","):
        proxy = proxy.strip()
        if not proxy:
            continue
        try:
            networks.append(ipaddress.ip_network(proxy, strict=False))
        except ValueError:
            logger.warning(f"Invalid trusted proxy network '{proxy}'")
    return networks


def is_trusted(ip: str, networks: List[IPNetwork]) -> bool:
    try:
        address = ipaddress.ip_address(ip)
    except ValueError:
        return False
    return any(address in network for network in networks)


def connection_client_key(request: Request) -> str:
    """
    Connecting address, read through X-Forwarded-For only behind a trusted proxy.

    With no TRUSTED_PROXIES configured the forwarding headers are ignored.
    Behind trusted proxies the rightmost untrusted hop is the client.
    """
    direct_ip = request.client.host if request.client else None
    if not direct_ip:
        return ANONYMOUS_CLIENT_KEY

    networks = trusted_proxy_networks()
    if not is_trusted(direct_ip, networks):
        return direct_ip

    hops = [hop.strip() for hop in request.headers.get("x-forwarded-for", "").split(",")]
    for hop in reversed(hops):
        try:
            ipaddress.ip_address(hop)
        except ValueError:
            continue
        if not is_trusted(hop, networks):
            return hop

    return direct_ip


def trending_policy() -> RateLimitPolicy:
    return RateLimitPolicy(
        scope=RateLimitScope.trending.value,
        limit=ApplicationConfig.TRENDING_RATE_LIMIT,
        window=timedelta(seconds=ApplicationConfig.TRENDING_RATE_WINDOW_SECONDS),
    )


def password_reset_policy() -> RateLimitPolicy:
    return RateLimitPolicy(
        scope=RateLimitScope.password_reset.value,
        limit=ApplicationConfig.PASSWORD_RESET_RATE_LIMIT,
        window=timedelta(seconds=ApplicationConfig.PASSWORD_RESET_RATE_WINDOW_SECONDS),
    )


def rate_limited(
    policy_factory: Callable[[], RateLimitPolicy],
    key: Callable[[Request], str] = client_key,
):
    """
    Build a dependency that counts the request and rejects it with 429.

    The policy is resolved on every request; key picks the counter bucket.
    """

    async def check_rate_limit(
        request: Request,
        response: Response,
        uow: UnitOfWork = Depends(get_unit_of_work),
    ) -> RateLimitDecision:
        policy = policy_factory()
        decision = await RateLimiter(uow).check(policy, key(request))

        headers = {
            "X-RateLimit-Limit": str(decision.limit),
            "X-RateLimit-Remaining": str(decision.remaining),
        }

        if not decision.success:
            headers["Retry-After"] = str(decision.retry_after)
            raise ClientError(
                Error("RATE_LIMITED", "Too many requests"),
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                headers=headers,
            )

        response.headers.update(headers)
        return decision

    return check_rate_limit
