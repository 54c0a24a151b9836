"""Call sites exercised by the chain tests.

Tests assert exact line numbers in this file: keep edits (imports included)
below the last function, or update the expected traces.
"""
from terror import new, wrap

ERR_SENTINEL = ValueError("some error")


def failed() -> Exception: return ERR_SENTINEL
def try_but_fail() -> Exception: return wrap(failed(), "trying something")
def try_but_failf(param: str) -> Exception: return wrap(failed(), "trying %s", param)

def wrap_no_message(err: BaseException) -> Exception: return wrap(err, "")
def wrap_message(err: BaseException, msg: str, *args: object) -> Exception:
    return wrap(err, msg, *args)


class SomeType:
    def wrap(self, err: BaseException, msg: str) -> Exception:
        return wrap(err, msg)

    @classmethod
    def wrap_cls(cls, err: BaseException, msg: str) -> Exception:
        return wrap(err, msg)


def new_err(msg: str, *args: object) -> Exception: return new(msg, *args)


def raised_error() -> Exception:
    def recover(exc: Exception) -> Exception:
        return wrap(exc, "raised")
    try:
        raise new("error")
    except Exception as exc:
        return recover(exc)
