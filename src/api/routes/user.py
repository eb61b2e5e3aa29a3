from fastapi import APIRouter, Depends, status

from src.api.error import ClientError, ServerError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import AuthSession
from src.app.use_cases.users import LoadMeUseCase, MeResponse
from src.depends import get_current_session, get_unit_of_work

router = APIRouter(tags=["User"])


@router.get("/me", status_code=status.HTTP_200_OK, response_model=MeResponse)
async def get_me(
    auth: AuthSession = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Load Current User

    Returns the account behind the caller's session.

    Raises:
        - 401 Unauthorized: Invalid or expired access token, or revoked session
        - 404 Not Found: Account no longer exists
    """
    result = await LoadMeUseCase(uow).execute(auth)

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
