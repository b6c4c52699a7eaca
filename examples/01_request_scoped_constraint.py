"""
Request-scoped action constraint example.

Demonstrates:
- Guarding endpoints with RequestScopedActionConstraint
- Registering the built-in services on app.state
- Resolving the request-scoped RequestIdService in an endpoint
"""

from fastapi import Depends, FastAPI

from fastapi_mvc_extensions import (
    RequestIdService,
    RequestScopedActionConstraint,
    ServiceCollection,
    add_mvc_services,
    constraint_dependency,
    request_service,
)

app = FastAPI(title="Request-Scoped Constraint Example")
app.state.services = add_mvc_services(ServiceCollection()).build_provider()


@app.get(
    "/reserved",
    dependencies=[Depends(constraint_dependency(RequestScopedActionConstraint("abc")))],
)
async def reserved_endpoint():
    """Only reachable with the header ``RequestId: abc``; 404 otherwise."""
    return {"message": "matched reserved request id"}


@app.get("/whoami")
async def whoami(
    request_ids: RequestIdService = Depends(request_service(RequestIdService)),
):
    """Echo the id of the current request (generated when not supplied)."""
    return {"request_id": request_ids.request_id}


if __name__ == "__main__":
    import uvicorn

    print("Starting server at http://localhost:8000")
    print("\nTry:")
    print("  curl -H 'RequestId: abc' http://localhost:8000/reserved   # 200")
    print("  curl -H 'RequestId: xyz' http://localhost:8000/reserved   # 404")
    print("  curl http://localhost:8000/whoami")
    uvicorn.run(app, host="0.0.0.0", port=8000)
