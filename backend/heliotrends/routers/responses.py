from fastapi.responses import JSONResponse


def cache_control(max_age: int) -> str:
    return f"public, max-age={max_age}"


def error_response(error: str, exc: Exception, status_code: int = 500) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "message": str(exc) or type(exc).__name__},
    )
