from app.domain.auth.schemas import SignInResponseDTO
from app.domain.exceptions import Unauthorized, ServerConfigurationError
from app.domain.reporting.schemas import SummaryDTO, AggregateDTO


def test_health_needs_no_token(anonymous_client):
    response = anonymous_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_api_health_has_timestamp(anonymous_client):
    response = anonymous_client.get("/api/health")

    body = response.json()
    assert body["ok"] is True
    assert body["timestamp"].endswith("Z")


def test_unknown_route_returns_problem_404(anonymous_client):
    response = anonymous_client.get("/api/nope")

    assert response.status_code == 404
    assert response.headers["content-type"].startswith("application/problem+json")
    assert response.json()["title"] == "Not Found"


def test_responses_carry_request_id_and_security_headers(anonymous_client):
    response = anonymous_client.get("/health", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"
    assert response.headers["X-Content-Type-Options"] == "nosniff"


def test_problem_body_has_trace_id(anonymous_client):
    response = anonymous_client.get("/api/nope", headers={"X-Request-ID": "req-404"})
    assert response.json()["trace_id"] == "req-404"


def test_oversized_body_returns_413(client):
    response = client.post(
        "/api/invoices",
        content=b"x" * (1024 * 1024 + 1),
        headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 413
    assert response.json()["title"] == "Payload Too Large"


def test_streamed_body_over_limit_returns_413(client, mocker):
    create = mocker.patch("app.services.invoices_service.create_invoice", new=mocker.AsyncMock())

    def chunks():
        for _ in range(3):
            yield b"x" * (600 * 1024)

    response = client.post("/api/invoices", content=chunks(), headers={"Content-Type": "application/json"})

    assert response.status_code == 413
    assert response.json()["title"] == "Payload Too Large"
    create.assert_not_awaited()


def test_streamed_body_under_limit_reaches_the_route(client, mocker):
    def chunks():
        yield b"{\"companyName\": \"ABC\", "
        yield b"\"trucks\": 1}"

    response = client.post("/api/invoices", content=chunks(), headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Missing or invalid fields"


def test_sign_in_returns_token(anonymous_client, mocker):
    sign_in = mocker.patch("app.api.v1.routes.auth.sign_in", new=mocker.AsyncMock(
        return_value=SignInResponseDTO(token="jwt", expires_in=43200)
    ))

    response = anonymous_client.post("/api/auth/sign-in", json={"accessCode": " secret "})

    assert response.status_code == 200
    assert response.json() == {"token": "jwt", "tokenType": "bearer", "expiresIn": 43200}
    assert sign_in.await_args.args[1] == "secret"


def test_sign_in_wrong_code_returns_401(anonymous_client, mocker):
    mocker.patch("app.api.v1.routes.auth.sign_in", new=mocker.AsyncMock(
        side_effect=Unauthorized("Invalid access code", ctx={"reason": "bad_credentials"})
    ))

    response = anonymous_client.post("/api/auth/sign-in", json={"accessCode": "nope"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid access code"


def test_sign_in_without_owner_returns_500(anonymous_client, mocker):
    mocker.patch("app.api.v1.routes.auth.sign_in", new=mocker.AsyncMock(
        side_effect=ServerConfigurationError("Owner not initialized")
    ))

    response = anonymous_client.post("/api/auth/sign-in", json={"accessCode": "x"})

    assert response.status_code == 500
    assert response.json()["detail"] == "Owner not initialized"


def test_sign_in_empty_code_returns_400(anonymous_client):
    response = anonymous_client.post("/api/auth/sign-in", json={"accessCode": "  "})
    assert response.status_code == 400


def test_summary_open_range_passes_none(client, mocker, owner_id):
    result = SummaryDTO(timezone="Asia/Kolkata", this_month=AggregateDTO(), prev_month=AggregateDTO(),
                        this_year=AggregateDTO())
    summary = mocker.patch("app.services.reporting_service.summary", new=mocker.AsyncMock(return_value=result))

    response = client.get("/api/dashboard/summary")

    assert response.status_code == 200
    body = response.json()
    assert body["timezone"] == "Asia/Kolkata"
    assert body["thisMonth"]["invoices"] == 0
    assert body["avgRatePerTon"] == 0
    assert summary.await_args.args == (mocker.ANY, owner_id, None)


def test_daily_invalid_date_returns_400(client):
    response = client.get("/api/dashboard/daily", params={"date": "yesterday"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid date"


def test_dashboard_requires_token(anonymous_client):
    assert anonymous_client.get("/api/dashboard/summary").status_code == 401
