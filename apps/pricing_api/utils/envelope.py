from fastapi.responses import JSONResponse


def ok(data=None, meta=None):
    return JSONResponse(
        content={
            "ok": True,
            "data": data,
            "meta": meta or {},
        }
    )


def error(message: str, code: str = "error", status: int = 400):
    return JSONResponse(
        status_code=status,
        content={
            "ok": False,
            "error": code,
            "message": message,
        },
    )


def catalog_failure(message: str, status: int = 500):
    """Shape the catalog screen expects when retrieval fails."""
    return JSONResponse(
        status_code=status,
        content={
            "error": "Failed to fetch catalog",
            "message": message,
        },
    )
