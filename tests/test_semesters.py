def test_batches_group_active_sections(client, make_semester):
    make_semester(section="63_C", title="Spring 63")
    make_semester(section="63_A", title="Spring 63")
    make_semester(section="64_B", title="Fall 64")
    make_semester(section="65_A", title="Old", is_active=False)

    r = client.get("/api/batches")
    assert r.status_code == 200
    data = r.json()

    assert [b["batch"] for b in data] == ["64", "63"]
    assert data[1]["sections"] == ["A", "C"]
    assert data[1]["displayName"] == "Batch 63"
    assert data[0]["sampleTitle"] == "Fall 64"


def test_semesters_by_batch_sorted_by_section(client, make_semester):
    make_semester(section="63_G")
    make_semester(section="63_A")
    make_semester(section="630_A")
    make_semester(section="64_A")

    r = client.get("/api/semesters/by-batch/63")
    assert r.status_code == 200
    body = r.json()
    assert body["batch"] == "63"
    assert body["count"] == 2
    assert [s["section"] for s in body["semesters"]] == ["63_A", "63_G"]


def test_semesters_by_batch_rejects_non_numeric(client):
    r = client.get("/api/semesters/by-batch/abc")
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid batch number. Must be a numeric value."}


def test_public_semesters_only_active(client, make_semester):
    active = make_semester(section="63_A")
    make_semester(section="63_B", is_active=False)

    r = client.get("/api/semesters/public")
    assert r.status_code == 200
    assert [s["id"] for s in r.json()] == [active.id]


def test_course_catalog_hides_inactive(client, make_semester, make_course):
    live = make_semester(section="63_A")
    old = make_semester(section="62_A", is_active=False)
    shown = make_course(live, course_code="CSE-1", is_highlighted=True)
    make_course(live, course_code="CSE-2", is_active=False)
    make_course(old, course_code="CSE-3")

    r = client.get("/api/courses/all")
    assert r.status_code == 200
    data = r.json()
    assert [c["id"] for c in data] == [shown.id]
    assert data[0]["semester"]["title"] == "Spring 2025"
