import pytest
from fastapi.testclient import TestClient

from comment_analyzer.app.main import create_app
from comment_analyzer.app.routes_auth import SESSION_HEADER
from comment_analyzer.exceptions import LexiconLoadError
from comment_analyzer.services.analysis_service import get_analysis_service
from comment_analyzer.services.auth_service import get_auth_service
from comment_analyzer.services.live_stream import get_live_stream


@pytest.fixture
def client(local_service, stream_session, auth_service):
    app = create_app()
    app.dependency_overrides[get_analysis_service] = lambda: local_service
    app.dependency_overrides[get_live_stream] = lambda: stream_session
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    with TestClient(app) as c:
        yield c


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json()["status"] == "ok"


def test_samples(client):
    comments = client.get("/analysis/samples").json()["comments"]
    assert len(comments) == 10


def test_sentiment(client):
    res = client.post(
        "/analysis/sentiment",
        json={"comments": ["This is good and helpful", "bad problem here", ""], "filter": "negative"},
    )
    body = res.json()
    assert body["status"] == "ok"
    result = body["result"]
    assert result["source"] == "local"
    assert result["stats"]["total"] == 2
    assert result["stats"]["percentages"]["positive"] == 50.0
    assert [c["text"] for c in result["comments"]] == ["bad problem here"]
    assert {row["name"] for row in result["chart"]} == {"Positive", "Negative", "Neutral"}


def test_sentiment_without_comments_is_an_error(client):
    body = client.post("/analysis/sentiment", json={"comments": ["  "]}).json()
    assert body["status"] == "error"
    assert body["error_type"] == "comment_data_error"


def test_summary(client):
    comments = [f"Comment number {i} about the draft." for i in range(5)]
    body = client.post("/analysis/summary", json={"comments": comments, "length": "short"}).json()
    assert body["status"] == "ok"
    assert body["result"]["source"] == "local"
    assert body["result"]["summary"] == "Comment number 0 about the draft."
    assert body["result"]["stats"]["original_words"] == 30


def test_invalid_summary_length_is_rejected(client):
    res = client.post("/analysis/summary", json={"comments": ["x"], "length": "huge"})
    assert res.status_code == 422


def test_wordcloud(client):
    payload = {
        "text": "policy policy policy reform reform startups",
        "seed": 11,
        "width": 500,
        "height": 300,
        "min_word_length": 3,
        "max_words": 10,
    }
    first = client.post("/analysis/wordcloud", json=payload).json()
    second = client.post("/analysis/wordcloud", json=payload).json()

    assert first["status"] == "ok"
    result = first["result"]
    assert result["frequencies"] == [["policy", 3], ["reform", 2], ["startups", 1]]
    for node in result["nodes"]:
        assert 0 <= node["x"] <= 500
        assert 0 <= node["y"] <= 300
    assert result["nodes"] == second["result"]["nodes"]


def test_wordcloud_needs_text(client):
    body = client.post("/analysis/wordcloud", json={"text": "   "}).json()
    assert body["status"] == "error"
    assert body["error_type"] == "comment_data_error"


def test_wordcloud_png(client):
    res = client.post("/analysis/wordcloud.png", json={"text": "reform reform policy", "seed": 1})
    assert res.status_code == 200
    assert res.headers["content-type"] == "image/png"
    assert res.content.startswith(b"\x89PNG")


def test_insights(client, tmp_path):
    text = "This is good and helpful\nbad problem here\nThe deadline is in March"
    body = client.post("/analysis/insights", json={"text": text, "save_report": True}).json()

    assert body["status"] == "ok"
    result = body["result"]
    assert result["sentiment"]["total"] == 3
    assert result["sentiment_source"] == "local"
    assert result["summary"]
    assert [c["id"] for c in result["comments"]] == [0, 1, 2]
    assert (tmp_path / "output").is_dir()
    assert result["report_path"].endswith(".yaml")


def test_stream_flow(client):
    assert client.post("/stream/tick").json()["comment"] is None

    state = client.post("/stream/start").json()
    assert state["streaming"] is True

    tick = client.post("/stream/tick").json()
    assert tick["comment"]["id"] == 0
    assert tick["comment"]["timestamp"] == "2025-09-01T10:30:00"
    assert tick["state"]["stats"]["total"] == 1

    added = client.post("/stream/comments", json={"text": "great support"}).json()
    assert added["comment"]["user"] == "You"
    assert [c["id"] for c in added["state"]["comments"]] == [1, 0]

    assert client.post("/stream/comments", json={"text": " "}).status_code == 422
    assert client.post("/stream/speed", json={"comments_per_second": 0}).status_code == 422
    assert client.post("/stream/speed", json={"comments_per_second": 4}).json()["speed"] == 4

    stopped = client.post("/stream/stop").json()
    assert stopped["streaming"] is False
    assert stopped["comments"] == []


def test_stream_sample(client):
    state = client.post("/stream/sample", json={"manual_text": "My own view"}).json()
    assert len(state["comments"]) == 10
    assert state["comments"][0]["text"] == "My own view"


def test_auth_flow(client):
    assert client.get("/auth/me").status_code == 401

    bad = client.post(
        "/auth/login",
        json={"email": "admin@mca.gov.in", "password": "nope", "role": "mca_official"},
    )
    assert bad.status_code == 401

    res = client.post(
        "/auth/login",
        json={"email": "citizen@email.com", "password": "password123", "role": "citizen"},
    )
    assert res.status_code == 200
    token = res.json()["token"]
    headers = {SESSION_HEADER: token}

    me = client.get("/auth/me", headers=headers).json()
    assert me["user"]["role"] == "citizen"

    assert client.get("/auth/permissions/submit_comments", headers=headers).status_code == 200
    assert client.get("/auth/permissions/admin_access", headers=headers).status_code == 403

    client.post("/auth/logout", headers=headers)
    assert client.get("/auth/me", headers=headers).status_code == 401


def test_register(client):
    payload = {"email": "new@example.com", "password": "pw", "name": "New", "role": "media_analyst"}
    res = client.post("/auth/register", json=payload)
    assert res.status_code == 200
    assert res.json()["user"]["verified"] is True

    assert client.post("/auth/register", json=payload).status_code == 409
    assert client.post("/auth/register", json={**payload, "email": "x@y.z", "role": "king"}).status_code == 422


def test_roles(client):
    roles = client.get("/auth/roles").json()
    assert "citizen" in roles
    assert "submit_comments" in roles["citizen"]["permissions"]


def test_wordcloud_png_rejects_blank_text(client):
    res = client.post("/analysis/wordcloud.png", json={"text": "  \n "})
    assert res.status_code == 422
    body = res.json()
    assert body["status"] == "error"
    assert body["error_type"] == "comment_data_error"


def test_wordcloud_png_reports_missing_lexicon(client, local_service, monkeypatch):
    def broken(*args, **kwargs):
        raise LexiconLoadError("YAML file not found: stopwords.yaml")

    monkeypatch.setattr(local_service, "word_cloud", broken)
    res = client.post("/analysis/wordcloud.png", json={"text": "reform policy"})
    assert res.status_code == 503
    assert res.json()["error_type"] == "lexicon_error"
