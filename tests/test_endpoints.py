"""
Integration tests for the resource endpoints using a SQLite database.
"""
import pytest


def _institute(api, code="IC"):
    r = api.post("/institutes", json={"code": code})
    assert r.status_code == 201, r.text
    return r.json()


def _course(api, institute_id, code="MC102", name="Algorithms", credits=6):
    r = api.post("/courses", json={"code": code, "name": name, "credits": credits, "institute_id": institute_id})
    assert r.status_code == 201, r.text
    return r.json()


def _study_period(api, code="2026S1", start_date="2026-03-01"):
    r = api.post("/study-periods", json={"code": code, "start_date": start_date})
    assert r.status_code == 201, r.text
    return r.json()


def _professor(api, name="Ada Lovelace"):
    r = api.post("/professors", json={"name": name})
    assert r.status_code == 201, r.text
    return r.json()


def _room(api, code="CB01"):
    r = api.post("/rooms", json={"code": code})
    assert r.status_code == 201, r.text
    return r.json()


def _class(api, course_id, study_period_id, code="A", professor_ids=()):
    r = api.post("/classes", json={
        "code": code,
        "course_id": course_id,
        "study_period_id": study_period_id,
        "professor_ids": list(professor_ids),
    })
    assert r.status_code == 201, r.text
    return r.json()


def _student(api, ra="182851", **extra):
    r = api.post("/students", json={"ra": ra, "name": "Grace Hopper", **extra})
    assert r.status_code == 201, r.text
    return r.json()


def _catalog(api, year=2026):
    r = api.post("/catalogs", json={"year": year})
    assert r.status_code == 201, r.text
    return r.json()


def _language(api, name="English"):
    r = api.post("/languages", json={"name": name})
    assert r.status_code == 201, r.text
    return r.json()


def _catalog_program(api, fixture, **sections):
    """A 2026 catalog listing program 34 of the fixture's institute."""
    program = api.post("/programs", json={
        "code": 34, "name": "Computer Engineering", "institute_id": fixture["institute"]["id"],
    }).json()
    year = _catalog(api)
    r = api.post("/catalog-programs", json={"catalog_id": year["id"], "program_id": program["id"], **sections})
    assert r.status_code == 201, r.text
    return r.json()


@pytest.fixture()
def catalog(api):
    """One institute, two courses, a study period, a professor and a room."""
    institute = _institute(api)
    return {
        "institute": institute,
        "course": _course(api, institute["id"]),
        "other_course": _course(api, institute["id"], code="MC202", name="Data Structures"),
        "period": _study_period(api),
        "professor": _professor(api),
        "room": _room(api),
    }


class TestHealth:
    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"


class TestPublicAccess:
    def test_public_reads(self, client):
        for path in ("/institutes", "/courses", "/professors", "/rooms", "/study-periods",
                     "/classes", "/class-schedules", "/programs", "/specializations",
                     "/languages", "/catalogs", "/catalog-programs"):
            assert client.get(path).status_code == 200, path

    def test_public_get_by_id_without_token(self, client):
        r = client.get("/courses/17")
        assert r.status_code == 404
        assert r.json() == {"description": "Course not found"}

    def test_students_require_token(self, client):
        assert client.get("/students").status_code == 401
        assert client.get("/students/1/curricula").status_code == 401


class TestInstitutes:
    def test_crud(self, api):
        institute = _institute(api)
        assert institute["links"]["self"] == f"/institutes/{institute['id']}"
        assert api.get("/institutes").json()[0]["code"] == "IC"

        r = api.patch(f"/institutes/{institute['id']}", json={"code": "IMECC"})
        assert r.status_code == 200
        assert r.json()["code"] == "IMECC"

        assert api.delete(f"/institutes/{institute['id']}").status_code == 204
        assert api.get(f"/institutes/{institute['id']}").status_code == 404

    def test_duplicate_code(self, api):
        _institute(api)
        r = api.post("/institutes", json={"code": "IC"})
        assert r.status_code == 400
        assert r.json()["errors"] == [{
            "code": "ALREADY_EXISTS",
            "path": ["body", "code"],
            "message": "Institute with this code already exists",
        }]

    def test_delete_blocked_by_courses(self, api, catalog):
        r = api.delete(f"/institutes/{catalog['institute']['id']}")
        assert r.status_code == 400
        assert r.json()["errors"][0]["code"] == "REFERENCE_EXISTS"

    def test_non_numeric_id(self, api):
        r = api.get("/institutes/abc")
        assert r.status_code == 400
        assert r.json()["errors"][0] == {
            "code": "INVALID_TYPE",
            "path": ["path", "id"],
            "message": "Input should be a valid integer, unable to parse string as an integer",
        }


class TestCourses:
    def test_create_and_get(self, api, catalog):
        course = catalog["course"]
        r = api.get(f"/courses/{course['id']}")
        assert r.status_code == 200
        body = r.json()
        assert body["institute_code"] == "IC"
        assert body["links"]["institute"] == f"/institutes/{catalog['institute']['id']}"

    def test_unknown_institute(self, api):
        r = api.post("/courses", json={"code": "X1", "name": "X", "credits": 2, "institute_id": 999})
        assert r.status_code == 400
        assert r.json()["errors"][0]["code"] == "REFERENCE_NOT_FOUND"
        assert r.json()["errors"][0]["path"] == ["body", "institute_id"]

    def test_string_credits_rejected(self, api, catalog):
        r = api.post("/courses", json={
            "code": "MA111", "name": "Calculus", "credits": "6", "institute_id": catalog["institute"]["id"],
        })
        assert r.status_code == 400
        assert [(e["code"], e["path"]) for e in r.json()["errors"]] == [("INVALID_TYPE", ["body", "credits"])]
        assert api.get("/courses").json()["total"] == 2

    def test_pagination(self, api, catalog):
        for i in range(3):
            _course(api, catalog["institute"]["id"], code=f"MC9{i}")
        r = api.get("/courses", params={"page": 2, "page_size": 2})
        assert r.status_code == 200
        page = r.json()
        assert page["total"] == 5
        assert page["quantity"] == 2
        assert page["links"]["prev"] == "/courses?page=1&page_size=2"
        assert page["links"]["next"] == "/courses?page=3&page_size=2"
        assert page["links"]["last_page"] == "/courses?page=3&page_size=2"

    def test_filter_by_institute_code(self, api, catalog):
        other = _institute(api, code="FEEC")
        _course(api, other["id"], code="EA772")
        r = api.get("/courses", params={"institute_code": "FEEC"})
        page = r.json()
        assert page["total"] == 1
        assert page["data"][0]["code"] == "EA772"
        assert "institute_code=FEEC" in page["links"]["first_page"]

    def test_large_page_size(self, api, catalog):
        r = api.get("/courses", params={"page_size": 150})
        assert r.status_code == 200
        assert r.json()["quantity"] == 2
        assert r.json()["links"]["last_page"] == "/courses?page=1&page_size=150"

    def test_page_size_minimum(self, api):
        r = api.get("/courses", params={"page_size": 0})
        assert r.status_code == 400
        assert r.json()["errors"][0]["path"] == ["query", "page_size"]

    def test_unknown_query_parameter(self, api):
        r = api.get("/courses", params={"colour": "red"})
        assert r.status_code == 400


class TestProfessors:
    def test_name_filter(self, api):
        _professor(api, "Ada Lovelace")
        _professor(api, "Alan Turing")
        r = api.get("/professors", params={"name": "ada"})
        assert [p["name"] for p in r.json()["data"]] == ["Ada Lovelace"]

    def test_name_filter_wildcards_are_literal(self, api):
        _professor(api, "Ana 100% Silva")
        _professor(api, "Ana 100 Silva")
        _professor(api, "Ana_Souza")
        _professor(api, "Ana Souza")
        r = api.get("/professors", params={"name": "100%"})
        assert [p["name"] for p in r.json()["data"]] == ["Ana 100% Silva"]
        r = api.get("/professors", params={"name": "ana_"})
        assert [p["name"] for p in r.json()["data"]] == ["Ana_Souza"]

    def test_delete_removes_from_classes(self, api, catalog):
        professor = catalog["professor"]
        course_class = _class(api, catalog["course"]["id"], catalog["period"]["id"], professor_ids=[professor["id"]])
        assert api.delete(f"/professors/{professor['id']}").status_code == 204
        assert api.get(f"/classes/{course_class['id']}").json()["professors"] == []


class TestClasses:
    def test_create_with_professors(self, api, catalog):
        second = _professor(api, "Alan Turing")
        course_class = _class(
            api, catalog["course"]["id"], catalog["period"]["id"],
            professor_ids=[catalog["professor"]["id"], second["id"]],
        )
        assert [p["name"] for p in course_class["professors"]] == ["Ada Lovelace", "Alan Turing"]
        assert course_class["course_code"] == "MC102"
        assert course_class["study_period_code"] == "2026S1"
        assert course_class["links"]["class_schedules"].startswith("/class-schedules?class_id=")

    def test_missing_references(self, api, catalog):
        r = api.post("/classes", json={
            "code": "A",
            "course_id": 999,
            "study_period_id": catalog["period"]["id"],
            "professor_ids": [catalog["professor"]["id"], 998],
        })
        assert r.status_code == 400
        paths = [e["path"] for e in r.json()["errors"]]
        assert ["body", "course_id"] in paths
        assert ["body", "professor_ids", "1"] in paths

    def test_patch_replaces_professors(self, api, catalog):
        course_class = _class(api, catalog["course"]["id"], catalog["period"]["id"],
                              professor_ids=[catalog["professor"]["id"]])
        other = _professor(api, "Barbara Liskov")
        r = api.patch(f"/classes/{course_class['id']}", json={"professor_ids": [other["id"]]})
        assert r.status_code == 200
        assert [p["id"] for p in r.json()["professors"]] == [other["id"]]

    def test_filters(self, api, catalog):
        _class(api, catalog["course"]["id"], catalog["period"]["id"], professor_ids=[catalog["professor"]["id"]])
        _class(api, catalog["other_course"]["id"], catalog["period"]["id"], code="B")
        assert api.get("/classes", params={"course_code": "MC202"}).json()["total"] == 1
        assert api.get("/classes", params={"professor_name": "lovelace"}).json()["total"] == 1
        assert api.get("/classes", params={"institute_code": "IC"}).json()["total"] == 2
        assert api.get("/classes", params={"study_period_id": catalog["period"]["id"]}).json()["total"] == 2

    def test_professor_name_filter_is_literal(self, api, catalog):
        _class(api, catalog["course"]["id"], catalog["period"]["id"], professor_ids=[catalog["professor"]["id"]])
        assert api.get("/classes", params={"professor_name": "%"}).json()["total"] == 0
        assert api.get("/classes", params={"professor_name": "a_a"}).json()["total"] == 0
        assert api.get("/classes", params={"professor_name": "ada lov"}).json()["total"] == 1

    def test_course_delete_blocked(self, api, catalog):
        _class(api, catalog["course"]["id"], catalog["period"]["id"])
        r = api.delete(f"/courses/{catalog['course']['id']}")
        assert r.status_code == 400
        assert r.json()["errors"][0]["code"] == "REFERENCE_EXISTS"


class TestClassSchedules:
    def _schedule(self, api, class_id, room_id, **overrides):
        payload = {"day_of_week": "MONDAY", "start": "08:00:00", "end": "10:00:00",
                   "class_id": class_id, "room_id": room_id, **overrides}
        return api.post("/class-schedules", json=payload)

    def test_create_and_delete_with_class(self, api, catalog):
        course_class = _class(api, catalog["course"]["id"], catalog["period"]["id"])
        r = self._schedule(api, course_class["id"], catalog["room"]["id"])
        assert r.status_code == 201
        schedule = r.json()
        assert schedule["room_code"] == "CB01"
        assert schedule["start"] == "08:00:00"

        assert api.delete(f"/classes/{course_class['id']}").status_code == 204
        assert api.get(f"/class-schedules/{schedule['id']}").status_code == 404

    def test_end_before_start(self, api, catalog):
        course_class = _class(api, catalog["course"]["id"], catalog["period"]["id"])
        r = self._schedule(api, course_class["id"], catalog["room"]["id"], start="10:00:00", end="08:00:00")
        assert r.status_code == 400
        assert r.json()["errors"][0] == {
            "code": "INVALID_VALUE", "path": ["body", "end"], "message": "end must be later than start",
        }

    def test_patch_window_checked_against_stored_values(self, api, catalog):
        course_class = _class(api, catalog["course"]["id"], catalog["period"]["id"])
        schedule = self._schedule(api, course_class["id"], catalog["room"]["id"]).json()
        r = api.patch(f"/class-schedules/{schedule['id']}", json={"start": "11:00:00"})
        assert r.status_code == 400

    def test_invalid_day(self, api, catalog):
        course_class = _class(api, catalog["course"]["id"], catalog["period"]["id"])
        r = self._schedule(api, course_class["id"], catalog["room"]["id"], day_of_week="FUNDAY")
        assert r.status_code == 400
        assert r.json()["errors"][0]["path"] == ["body", "day_of_week"]

    def test_filters_and_room_guard(self, api, catalog):
        course_class = _class(api, catalog["course"]["id"], catalog["period"]["id"])
        self._schedule(api, course_class["id"], catalog["room"]["id"])
        self._schedule(api, course_class["id"], catalog["room"]["id"], day_of_week="WEDNESDAY")
        assert api.get("/class-schedules", params={"day_of_week": "WEDNESDAY"}).json()["total"] == 1
        assert api.get("/class-schedules", params={"room_id": catalog["room"]["id"]}).json()["total"] == 2

        r = api.delete(f"/rooms/{catalog['room']['id']}")
        assert r.status_code == 400
        assert r.json()["errors"][0]["code"] == "REFERENCE_EXISTS"

    def test_listed_in_weekday_order(self, api, catalog):
        course_class = _class(api, catalog["course"]["id"], catalog["period"]["id"])
        for day in ("SATURDAY", "FRIDAY", "MONDAY", "WEDNESDAY", "TUESDAY"):
            assert self._schedule(api, course_class["id"], catalog["room"]["id"], day_of_week=day).status_code == 201
        days = [s["day_of_week"] for s in api.get("/class-schedules").json()["data"]]
        assert days == ["MONDAY", "TUESDAY", "WEDNESDAY", "FRIDAY", "SATURDAY"]


class TestProgramsAndSpecializations:
    def test_program_code_unique_per_institute(self, api):
        ic = _institute(api)
        feec = _institute(api, code="FEEC")
        payload = {"code": 42, "name": "Computer Engineering", "institute_id": ic["id"]}
        assert api.post("/programs", json=payload).status_code == 201
        r = api.post("/programs", json=payload)
        assert r.status_code == 400
        assert r.json()["errors"][0]["code"] == "ALREADY_EXISTS"
        assert api.post("/programs", json={**payload, "institute_id": feec["id"]}).status_code == 201
        assert len(api.get("/programs", params={"institute_id": ic["id"]}).json()) == 1

    def test_students_count_and_delete_guard(self, api):
        ic = _institute(api)
        program = api.post("/programs", json={"code": 34, "name": "CS", "institute_id": ic["id"]}).json()
        spec = api.post("/specializations", json={"code": "AA", "name": "Systems"}).json()
        _student(api, program_id=program["id"], specialization_id=spec["id"])

        assert api.get(f"/programs/{program['id']}").json()["students_count"] == 1
        assert api.get(f"/specializations/{spec['id']}").json()["students_count"] == 1
        assert api.delete(f"/programs/{program['id']}").status_code == 400
        assert api.delete(f"/specializations/{spec['id']}").status_code == 400


class TestStudents:
    def test_crud(self, api):
        student = _student(api)
        assert student["links"]["curricula"] == f"/students/{student['id']}/curricula"
        assert student["links"]["program"] is None
        assert student["links"]["catalog"] is None

        r = api.patch(f"/students/{student['id']}", json={"name": "Grace B. Hopper"})
        assert r.json()["name"] == "Grace B. Hopper"
        assert api.get("/students").json()["total"] == 1
        assert api.delete(f"/students/{student['id']}").status_code == 204

    def test_duplicate_ra_and_missing_program(self, api):
        _student(api)
        r = api.post("/students", json={"ra": "182851", "name": "Other", "program_id": 77})
        assert r.status_code == 400
        codes = {e["code"] for e in r.json()["errors"]}
        assert codes == {"ALREADY_EXISTS", "REFERENCE_NOT_FOUND"}

    def test_catalog(self, api):
        year = _catalog(api)
        student = _student(api, catalog_id=year["id"])
        assert student["links"]["catalog"] == f"/catalogs/{year['id']}"
        assert api.get("/students", params={"catalog_id": year["id"]}).json()["total"] == 1

        r = api.post("/students", json={"ra": "1", "name": "Other", "catalog_id": 404})
        assert r.status_code == 400
        assert r.json()["errors"][0]["path"] == ["body", "catalog_id"]


class TestLanguages:
    def test_crud(self, api, client):
        english = _language(api, "English")
        _language(api, "Deutsch")
        assert english["links"]["self"] == f"/languages/{english['id']}"
        assert english["catalog_languages_count"] == 0
        assert [lang["name"] for lang in client.get("/languages").json()] == ["Deutsch", "English"]

        r = api.patch(f"/languages/{english['id']}", json={"name": "Inglês"})
        assert r.status_code == 200
        assert r.json()["name"] == "Inglês"

        assert api.delete(f"/languages/{english['id']}").status_code == 204
        assert client.get(f"/languages/{english['id']}").status_code == 404

    def test_empty_name(self, api):
        r = api.post("/languages", json={"name": ""})
        assert r.status_code == 400
        assert r.json()["errors"][0]["path"] == ["body", "name"]

    def test_delete_blocked_while_offered(self, api, catalog):
        english = _language(api, "English")
        cp = _catalog_program(api, catalog, languages=[{"language_id": english["id"]}])
        assert api.get(f"/languages/{english['id']}").json()["catalog_languages_count"] == 1
        r = api.delete(f"/languages/{english['id']}")
        assert r.status_code == 400
        assert r.json()["errors"][0]["code"] == "REFERENCE_EXISTS"

        assert api.delete(f"/catalog-programs/{cp['id']}").status_code == 204
        assert api.delete(f"/languages/{english['id']}").status_code == 204


class TestCatalogs:
    def test_crud(self, api, client):
        older = _catalog(api, 2024)
        newer = _catalog(api, 2026)
        assert newer["links"] == {
            "self": f"/catalogs/{newer['id']}",
            "programs": f"/catalog-programs?catalog_id={newer['id']}",
        }
        assert [c["year"] for c in client.get("/catalogs").json()] == [2026, 2024]
        assert [c["id"] for c in client.get("/catalogs", params={"year": 2024}).json()] == [older["id"]]

        r = api.patch(f"/catalogs/{older['id']}", json={"year": 2025})
        assert r.status_code == 200
        assert r.json()["year"] == 2025

        assert api.delete(f"/catalogs/{older['id']}").status_code == 204
        assert client.get(f"/catalogs/{older['id']}").status_code == 404

    def test_duplicate_year(self, api):
        first = _catalog(api, 2026)
        r = api.post("/catalogs", json={"year": 2026})
        assert r.status_code == 400
        assert r.json()["errors"] == [{
            "code": "ALREADY_EXISTS",
            "path": ["body", "year"],
            "message": "Catalog for year 2026 already exists",
        }]
        other = _catalog(api, 2027)
        assert api.patch(f"/catalogs/{other['id']}", json={"year": 2026}).status_code == 400
        assert api.patch(f"/catalogs/{first['id']}", json={"year": 2026}).status_code == 200

    def test_year_range_and_type(self, api):
        assert api.post("/catalogs", json={"year": 1800}).json()["errors"][0]["code"] == "INVALID_VALUE"
        assert api.post("/catalogs", json={"year": "2026"}).json()["errors"][0]["code"] == "INVALID_TYPE"

    def test_counts_and_delete_guard(self, api, catalog):
        cp = _catalog_program(api, catalog)
        year_id = cp["catalog_id"]
        _student(api, catalog_id=year_id)
        body = api.get(f"/catalogs/{year_id}").json()
        assert body["programs_count"] == 1
        assert body["students_count"] == 1
        assert body["program_ids"] == [cp["program_id"]]

        r = api.delete(f"/catalogs/{year_id}")
        assert r.status_code == 400
        assert r.json()["errors"][0] == {
            "code": "REFERENCE_EXISTS",
            "path": ["path", "id"],
            "message": "Cannot delete catalog with 1 students and 1 programs",
        }


class TestCatalogPrograms:
    def test_create_with_blocks_and_tracks(self, api, client, catalog):
        spec = api.post("/specializations", json={"code": "AA", "name": "Systems"}).json()
        english = _language(api, "English")
        course_id, other_id = catalog["course"]["id"], catalog["other_course"]["id"]
        cp = _catalog_program(
            api,
            catalog,
            course_blocks=[
                {"type": "MANDATORY", "course_ids": [course_id]},
                {"type": "ELECTIVE", "credits": 4, "course_ids": [other_id]},
            ],
            specializations=[{
                "specialization_id": spec["id"],
                "course_blocks": [{"type": "MANDATORY", "course_ids": [other_id]}],
            }],
            languages=[{"language_id": english["id"]}],
        )
        assert cp["catalog_year"] == 2026
        assert cp["program_name"] == "Computer Engineering"
        assert [c["course_code"] for c in cp["base"]["mandatory"]] == ["MC102"]
        assert cp["base"]["electives"][0]["credits"] == 4
        assert cp["base"]["electives"][0]["courses"][0]["link"] == f"/courses/{other_id}"
        assert cp["specializations"][0]["code"] == "AA"
        assert [c["course_code"] for c in cp["specializations"][0]["blocks"]["mandatory"]] == ["MC202"]
        assert cp["languages"] == [{
            "language_id": english["id"],
            "name": "English",
            "blocks": {"mandatory": [], "electives": []},
        }]
        assert cp["links"]["catalog"] == f"/catalogs/{cp['catalog_id']}"

        assert client.get(f"/catalog-programs/{cp['id']}").json() == cp
        listed = client.get("/catalog-programs", params={"catalog_id": cp["catalog_id"]}).json()
        assert [item["id"] for item in listed] == [cp["id"]]

    def test_program_listed_once_per_catalog(self, api, catalog):
        cp = _catalog_program(api, catalog)
        r = api.post("/catalog-programs", json={"catalog_id": cp["catalog_id"], "program_id": cp["program_id"]})
        assert r.status_code == 400
        assert r.json()["errors"][0]["code"] == "ALREADY_EXISTS"
        assert r.json()["errors"][0]["path"] == ["body", "program_id"]

    def test_unknown_references(self, api, catalog):
        year = _catalog(api)
        r = api.post("/catalog-programs", json={
            "catalog_id": year["id"],
            "program_id": 404,
            "course_blocks": [{"type": "MANDATORY", "course_ids": [catalog["course"]["id"], 998]}],
            "languages": [{"language_id": 77}],
        })
        assert r.status_code == 400
        paths = {tuple(e["path"]): e["code"] for e in r.json()["errors"]}
        assert paths == {
            ("body", "program_id"): "REFERENCE_NOT_FOUND",
            ("body", "course_blocks", "0", "course_ids", "1"): "REFERENCE_NOT_FOUND",
            ("body", "languages", "0", "language_id"): "REFERENCE_NOT_FOUND",
        }
        assert api.get("/catalog-programs").json() == []

    def test_patch_replaces_only_given_sections(self, api, catalog):
        english = _language(api, "English")
        cp = _catalog_program(
            api,
            catalog,
            course_blocks=[{"type": "MANDATORY", "course_ids": [catalog["course"]["id"]]}],
            languages=[{"language_id": english["id"]}],
        )
        r = api.patch(f"/catalog-programs/{cp['id']}", json={
            "course_blocks": [{"type": "MANDATORY", "course_ids": [catalog["other_course"]["id"]]}],
        })
        assert r.status_code == 200
        assert [c["course_code"] for c in r.json()["base"]["mandatory"]] == ["MC202"]
        assert [lang["name"] for lang in r.json()["languages"]] == ["English"]

        r = api.patch(f"/catalog-programs/{cp['id']}", json={"languages": [{"language_id": english["id"]}]})
        assert r.status_code == 200
        assert len(r.json()["languages"]) == 1

        r = api.patch(f"/catalog-programs/{cp['id']}", json={"languages": []})
        assert r.json()["languages"] == []
        assert [c["course_code"] for c in r.json()["base"]["mandatory"]] == ["MC202"]

    def test_duplicate_track_rejected(self, api, catalog):
        english = _language(api, "English")
        cp = _catalog_program(api, catalog)
        r = api.patch(f"/catalog-programs/{cp['id']}", json={
            "languages": [{"language_id": english["id"]}, {"language_id": english["id"]}],
        })
        assert r.status_code == 400
        assert r.json()["errors"][0] == {
            "code": "INVALID_VALUE",
            "path": ["body", "languages", "1", "language_id"],
            "message": f"Language {english['id']} is listed more than once",
        }

    def test_guards_on_referenced_rows(self, api, catalog):
        cp = _catalog_program(
            api, catalog, course_blocks=[{"type": "MANDATORY", "course_ids": [catalog["course"]["id"]]}]
        )
        assert api.delete(f"/programs/{cp['program_id']}").status_code == 400
        assert api.delete(f"/courses/{catalog['course']['id']}").status_code == 400

        assert api.delete(f"/catalog-programs/{cp['id']}").status_code == 204
        assert api.get(f"/catalog-programs/{cp['id']}").status_code == 404
        assert api.delete(f"/courses/{catalog['course']['id']}").status_code == 204


class TestCurricula:
    def _create(self, api, student_id, courses=()):
        r = api.post(f"/students/{student_id}/curricula", json={"courses": list(courses)})
        assert r.status_code == 201, r.text
        return r.json()

    def test_create_list_and_get(self, api, catalog):
        student = _student(api)
        first = self._create(api, student["id"], [{"course_id": catalog["course"]["id"], "semester": 1}])
        second = self._create(api, student["id"])
        assert first["links"] == {
            "self": f"/students/{student['id']}/curricula/{first['id']}",
            "student": f"/students/{student['id']}",
        }
        assert first["courses"][0]["course_name"] == "Algorithms"
        assert second["courses"] == []

        listed = api.get(f"/students/{student['id']}/curricula").json()
        assert [c["id"] for c in listed] == [first["id"], second["id"]]
        assert api.get(first["links"]["self"]).json() == first

    def test_empty_body_creates_empty_curriculum(self, api):
        student = _student(api)
        r = api.post(f"/students/{student['id']}/curricula", json={})
        assert r.status_code == 201
        assert r.json()["courses"] == []

    def test_put_keeps_submitted_order(self, api, catalog):
        student = _student(api)
        curriculum = self._create(api, student["id"], [{"course_id": catalog["course"]["id"]}])
        url = curriculum["links"]["self"]

        r = api.put(url, json={"courses": [
            {"course_id": catalog["other_course"]["id"], "semester": 2},
            {"course_id": catalog["course"]["id"], "semester": 1},
        ]})
        assert r.status_code == 200
        assert [c["course_code"] for c in r.json()["courses"]] == ["MC202", "MC102"]
        assert [c["course_code"] for c in api.get(url).json()["courses"]] == ["MC202", "MC102"]

    def test_failed_put_keeps_previous_list(self, api, catalog):
        student = _student(api)
        curriculum = self._create(api, student["id"], [{"course_id": catalog["course"]["id"]}])
        url = curriculum["links"]["self"]

        r = api.put(url, json={"courses": [
            {"course_id": catalog["other_course"]["id"]},
            {"course_id": 999},
        ]})
        assert r.status_code == 400
        assert r.json()["errors"][0]["path"] == ["body", "courses", "1", "course_id"]
        assert [c["course_id"] for c in api.get(url).json()["courses"]] == [catalog["course"]["id"]]

    def test_duplicate_course_rejected(self, api, catalog):
        student = _student(api)
        course_id = catalog["course"]["id"]
        r = api.post(f"/students/{student['id']}/curricula",
                     json={"courses": [{"course_id": course_id}, {"course_id": course_id}]})
        assert r.status_code == 400
        assert r.json()["errors"][0]["code"] == "INVALID_VALUE"

    def test_unknown_student(self, api):
        assert api.get("/students/999/curricula").json() == {"description": "Student not found"}
        r = api.post("/students/999/curricula", json={"courses": []})
        assert r.status_code == 404

    def test_curriculum_of_another_student(self, api):
        owner = _student(api)
        other = _student(api, ra="200000")
        curriculum = self._create(api, owner["id"])
        r = api.get(f"/students/{other['id']}/curricula/{curriculum['id']}")
        assert r.status_code == 404
        assert r.json() == {"description": "Curriculum not found for this student"}

    def test_patch_moves_to_another_student(self, api):
        owner = _student(api)
        other = _student(api, ra="200000")
        curriculum = self._create(api, owner["id"])
        url = curriculum["links"]["self"]

        assert api.patch(url, json={"student_id": 404}).json()["errors"][0]["code"] == "REFERENCE_NOT_FOUND"
        r = api.patch(url, json={"student_id": other["id"]})
        assert r.status_code == 200
        assert r.json()["student_id"] == other["id"]
        assert api.get(url).status_code == 404
        assert api.get(f"/students/{other['id']}/curricula/{curriculum['id']}").status_code == 200

    def test_delete(self, api, catalog):
        student = _student(api)
        curriculum = self._create(api, student["id"], [{"course_id": catalog["course"]["id"]}])
        url = curriculum["links"]["self"]
        assert api.delete(url).status_code == 204
        assert api.get(url).status_code == 404
        assert api.delete(url).status_code == 404

    def test_student_delete_removes_curricula(self, api, catalog):
        student = _student(api)
        self._create(api, student["id"], [{"course_id": catalog["course"]["id"]}])
        assert api.delete(f"/students/{student['id']}").status_code == 204
        assert api.delete(f"/courses/{catalog['course']['id']}").status_code == 204


class TestCurriculumCourses:
    @pytest.fixture()
    def curriculum(self, api, catalog):
        student = _student(api)
        r = api.post(f"/students/{student['id']}/curricula",
                     json={"courses": [{"course_id": catalog["course"]["id"], "semester": 1}]})
        return r.json()

    def test_add_appends(self, api, catalog, curriculum):
        url = f"{curriculum['links']['self']}/courses"
        r = api.post(url, json={"course_id": catalog["other_course"]["id"], "semester": 3})
        assert r.status_code == 201
        assert r.json() == {
            "course_id": catalog["other_course"]["id"],
            "course_code": "MC202",
            "course_name": "Data Structures",
            "semester": 3,
            "link": f"/courses/{catalog['other_course']['id']}",
        }
        courses = api.get(curriculum["links"]["self"]).json()["courses"]
        assert [c["course_code"] for c in courses] == ["MC102", "MC202"]

    def test_add_rejects_unknown_and_repeated_course(self, api, catalog, curriculum):
        url = f"{curriculum['links']['self']}/courses"
        r = api.post(url, json={"course_id": 999})
        assert r.status_code == 400
        assert r.json()["errors"][0]["code"] == "REFERENCE_NOT_FOUND"

        r = api.post(url, json={"course_id": catalog["course"]["id"]})
        assert r.status_code == 400
        assert r.json()["errors"][0] == {
            "code": "ALREADY_EXISTS",
            "path": ["body", "course_id"],
            "message": f"Course {catalog['course']['id']} is already in this curriculum",
        }

    def test_patch_semester(self, api, catalog, curriculum):
        url = f"{curriculum['links']['self']}/courses/{catalog['course']['id']}"
        r = api.patch(url, json={"semester": 4})
        assert r.status_code == 200
        assert r.json()["semester"] == 4
        assert api.patch(url, json={"semester": 40}).status_code == 400

    def test_remove(self, api, catalog, curriculum):
        url = f"{curriculum['links']['self']}/courses/{catalog['course']['id']}"
        assert api.delete(url).status_code == 204
        assert api.get(curriculum["links"]["self"]).json()["courses"] == []
        r = api.delete(url)
        assert r.status_code == 404
        assert r.json() == {"description": "Course not found in curriculum"}

    def test_wrong_student(self, api, catalog, curriculum):
        other = _student(api, ra="200000")
        url = f"/students/{other['id']}/curricula/{curriculum['id']}/courses"
        r = api.post(url, json={"course_id": catalog["other_course"]["id"]})
        assert r.status_code == 404
        assert r.json() == {"description": "Curriculum not found for this student"}
