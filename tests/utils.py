import inspect
from pathlib import Path

from spinn3r.transport import HttpResponse


def get_caller(depth: int = 1) -> Path:
    caller_frame = inspect.stack()[depth + 1]
    caller_file_path = Path(caller_frame.filename)

    return caller_file_path


def load_fixture(filename: str) -> bytes:
    caller_file_path = get_caller()

    # Use the directory of the calling file
    data_dir = caller_file_path.parent / "testdata"
    return (data_dir / filename).read_bytes()


def ok(content: bytes) -> HttpResponse:
    return HttpResponse(status_code=200, reason="OK", content=content)


def server_error() -> HttpResponse:
    return HttpResponse(status_code=503, reason="Service Unavailable")


def client_error() -> HttpResponse:
    return HttpResponse(status_code=403, reason="Forbidden")


def network_error() -> HttpResponse:
    return HttpResponse(reason="Connection refused")
