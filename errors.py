from typing import Any, Dict, List, Optional


class AppError(Exception):
    """Base class for errors that map onto a client response"""
    status_code = 500

    def __init__(self, msg: str):
        super().__init__(msg)
        self.msg = msg

    def body(self) -> Dict[str, Any]:
        return {"msg": self.msg}


class ValidationError(AppError):
    """
    Client input was malformed or missing.
    Rendered as a list of field errors: {"errors": [{"msg", "param", "location"}]}
    """
    status_code = 400

    def __init__(self, errors: List[Dict[str, Any]]):
        super().__init__("; ".join(error["msg"] for error in errors))
        self.errors = errors

    @classmethod
    def single(cls, msg: str, param: Optional[str] = None, location: str = "body"):
        error = {"msg": msg}
        if param is not None:
            error.update({"param": param, "location": location})
        return cls([error])

    def body(self) -> Dict[str, Any]:
        return {"errors": self.errors}


class InvalidCredentialsError(ValidationError):
    # same message for unknown email and wrong password
    def __init__(self):
        super().__init__([{"msg": "Invalid Credentials"}])


class AuthenticationError(AppError):
    status_code = 401


class AuthorizationError(AppError):
    status_code = 401

    def __init__(self, msg: str = "User not authorized"):
        super().__init__(msg)


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    status_code = 400


class InternalError(AppError):
    status_code = 500

    def __init__(self, msg: str = "Server error"):
        super().__init__(msg)
