from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from collegeadmin.db.models import (
    Attendance,
    Circular,
    FacultyAssignment,
    FeeInvoice,
    Profile,
    Result,
    Student,
    Subject,
)


@pytest.fixture
def lecturer(db, make_faculty, school_class):
    """Преподаватель, назначенный на school_class."""
    faculty, profile = make_faculty(full_name="Dr. Meera Rao")
    db.add(FacultyAssignment(class_id=school_class.id, faculty_id=faculty.id, subject="DBMS"))
    db.commit()
    return faculty, profile


@pytest.fixture
def subject(db, school_class):
    subject = Subject(code="CS301", name="Databases", credits=4, class_id=school_class.id)
    db.add(subject)
    db.commit()
    db.refresh(subject)
    return subject


# ---------- auth ----------

def test_login_returns_token(client, make_profile):
    make_profile("admin", email="office@college.test", password="s3cret!")

    response = client.post("/api/auth/login", json={"email": "office@college.test", "password": "s3cret!"})
    assert response.status_code == 200
    token = response.json()["access_token"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["role"] == "admin"


def test_login_rejects_wrong_password(client, make_profile):
    make_profile("admin", email="office@college.test", password="s3cret!")

    response = client.post("/api/auth/login", json={"email": "office@college.test", "password": "nope"})
    assert response.status_code == 401


def test_missing_token_is_unauthorized(client):
    assert client.get("/api/admin/dashboard").status_code == 401


def test_faculty_cannot_open_admin_pages(client, auth_headers, lecturer):
    _, profile = lecturer
    headers = auth_headers(profile)

    assert client.get("/api/admin/dashboard", headers=headers).status_code == 403
    assert client.get("/api/admin/reports/students/export", headers=headers).status_code == 403
    assert client.get("/api/students/", headers=headers).status_code == 403


# ---------- students ----------

def test_create_student_provisions_account(client, db, admin, auth_headers, school_class):
    response = client.post(
        "/api/students/",
        json={
            "student_id": "CS-2024-001",
            "full_name": "Asha Verma",
            "email": "asha@college.test",
            "password": "pass1234",
            "class_id": school_class.id,
        },
        headers=auth_headers(admin),
    )
    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "active"
    assert body["profile_id"] is not None

    profile = db.get(Profile, body["profile_id"])
    assert profile.role == "student"
    assert profile.full_name == "Asha Verma"

    login = client.post("/api/auth/login", json={"email": "asha@college.test", "password": "pass1234"})
    assert login.status_code == 200


def test_duplicate_student_id_conflicts(client, admin, auth_headers, make_student):
    existing = make_student()

    response = client.post(
        "/api/students/",
        json={"student_id": existing.student_id},
        headers=auth_headers(admin),
    )
    assert response.status_code == 409
    assert existing.student_id in response.json()["detail"]


def test_duplicate_email_conflicts(client, admin, auth_headers, make_profile):
    make_profile("student", email="taken@college.test")

    response = client.post(
        "/api/students/",
        json={
            "student_id": "CS-2024-002",
            "full_name": "Someone",
            "email": "taken@college.test",
            "password": "pass1234",
        },
        headers=auth_headers(admin),
    )
    assert response.status_code == 409


def test_student_listing_resolves_relations(client, admin, auth_headers, make_student, school_class):
    make_student(class_id=school_class.id, full_name="Ravi Kumar")
    make_student(with_profile=False)

    response = client.get("/api/students/", headers=auth_headers(admin))
    assert response.status_code == 200
    items = response.json()["items"]
    assert len(items) == 2

    by_code = {item["student_id"]: item for item in items}
    assert by_code["STU-001"]["profile"]["full_name"] == "Ravi Kumar"
    assert by_code["STU-001"]["class"]["name"] == "CSE-A"
    assert by_code["STU-001"]["batch"] is None
    assert by_code["STU-002"]["profile"] is None


def test_get_missing_student_is_404(client, admin, auth_headers):
    response = client.get("/api/students/404", headers=auth_headers(admin))
    assert response.status_code == 404


# ---------- attendance ----------

def test_attendance_resubmission_replaces_records(client, db, auth_headers, lecturer, make_student, school_class):
    _, profile = lecturer
    first = make_student(class_id=school_class.id)
    second = make_student(class_id=school_class.id)
    url = f"/api/attendance/class/{school_class.id}"
    day = "2025-03-10"

    response = client.put(
        url,
        json={"date": day, "entries": [
            {"student_id": first.id, "present": True},
            {"student_id": second.id, "present": True},
        ]},
        headers=auth_headers(profile),
    )
    assert response.status_code == 200

    response = client.put(
        url,
        json={"date": day, "entries": [
            {"student_id": first.id, "present": True},
            {"student_id": second.id, "present": False},
        ]},
        headers=auth_headers(profile),
    )
    assert response.status_code == 200

    db.expire_all()
    rows = db.query(Attendance).filter(Attendance.class_id == school_class.id).all()
    assert len(rows) == 2
    assert {r.student_id: r.status for r in rows} == {first.id: "present", second.id: "absent"}

    roll = client.get(url, params={"on": day}, headers=auth_headers(profile))
    assert roll.status_code == 200
    assert [(e["student_id"], e["is_present"]) for e in roll.json()] == [(first.id, True), (second.id, False)]


def test_attendance_rejects_duplicate_students(client, auth_headers, lecturer, make_student, school_class):
    _, profile = lecturer
    student = make_student(class_id=school_class.id)

    response = client.put(
        f"/api/attendance/class/{school_class.id}",
        json={"date": "2025-03-10", "entries": [
            {"student_id": student.id, "present": True},
            {"student_id": student.id, "present": False},
        ]},
        headers=auth_headers(profile),
    )
    assert response.status_code == 422


def test_attendance_requires_assignment(client, auth_headers, make_faculty, school_class):
    _, profile = make_faculty()

    response = client.get(
        f"/api/attendance/class/{school_class.id}",
        params={"on": "2025-03-10"},
        headers=auth_headers(profile),
    )
    assert response.status_code == 403


# ---------- results ----------

def test_result_upload_derives_grades(client, db, auth_headers, lecturer, make_student, school_class, subject):
    _, profile = lecturer
    top = make_student(class_id=school_class.id)
    low = make_student(class_id=school_class.id)

    response = client.post(
        "/api/results/",
        json={
            "class_id": school_class.id,
            "subject_id": subject.id,
            "exam_type": "Mid-term",
            "academic_year": "2024-25",
            "entries": [
                {"student_id": top.id, "marks_obtained": "90"},
                {"student_id": low.id, "marks_obtained": "45"},
            ],
        },
        headers=auth_headers(profile),
    )
    assert response.status_code == 201
    body = response.json()
    assert [r["grade"] for r in body] == ["A+", "D"]
    assert all(r["semester"] == school_class.semester for r in body)

    update = client.patch(
        f"/api/results/{body[1]['id']}",
        json={"marks_obtained": "72"},
        headers=auth_headers(profile),
    )
    assert update.status_code == 200
    assert update.json()["grade"] == "B+"

    db.expire_all()
    assert db.get(Result, body[1]["id"]).grade == "B+"


def test_result_upload_rejects_zero_max_marks(client, db, auth_headers, lecturer, make_student, school_class, subject):
    _, profile = lecturer
    student = make_student(class_id=school_class.id)

    response = client.post(
        "/api/results/",
        json={
            "class_id": school_class.id,
            "subject_id": subject.id,
            "exam_type": "Quiz",
            "academic_year": "2024-25",
            "max_marks": "0",
            "entries": [{"student_id": student.id, "marks_obtained": "5"}],
        },
        headers=auth_headers(profile),
    )
    assert response.status_code == 422
    assert db.query(Result).count() == 0


# ---------- fees ----------

def test_student_sees_fee_totals(client, db, auth_headers, make_student):
    student = make_student()
    db.add_all([
        FeeInvoice(student_id=student.id, semester=1, amount=Decimal("1000.00"), payment_status="paid"),
        FeeInvoice(student_id=student.id, semester=2, amount=Decimal("500.00"), payment_status="pending"),
        FeeInvoice(student_id=student.id, semester=3, amount=Decimal("250.00"), payment_status="overdue"),
    ])
    db.commit()
    profile = db.get(Profile, student.profile_id)

    response = client.get("/api/students/me/fees", headers=auth_headers(profile))
    assert response.status_code == 200
    body = response.json()
    assert sorted(item["amount"] for item in body["items"]) == ["1000.00", "250.00", "500.00"]
    assert body["paid_total"] == "1000.00"
    assert body["pending_total"] == "750.00"


def test_paying_an_invoice_stamps_payment_date(client, admin, auth_headers, make_student):
    student = make_student()
    headers = auth_headers(admin)

    created = client.post(
        "/api/fees/",
        json={"student_id": student.id, "semester": 1, "amount": "1200.00"},
        headers=headers,
    )
    assert created.status_code == 201
    assert created.json()["payment_date"] is None

    paid = client.put(f"/api/fees/{created.json()['id']}", json={"payment_status": "paid"}, headers=headers)
    assert paid.status_code == 200
    assert paid.json()["payment_date"] is not None

    reopened = client.put(f"/api/fees/{created.json()['id']}", json={"payment_status": "pending"}, headers=headers)
    assert reopened.json()["payment_date"] is None


# ---------- reports ----------

def test_csv_export(client, admin, auth_headers, make_student):
    make_student(full_name='Doe, "JD" John')

    response = client.get("/api/admin/reports/students/export", headers=auth_headers(admin))
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    expected_name = f"students_report_{date.today().isoformat()}.csv"
    assert expected_name in response.headers["content-disposition"]

    lines = response.text.split("\n")
    assert lines[0] == '"Student ID","Name","Email","Status","Enrollment Date"'
    assert lines[1].startswith('"STU-001","Doe, ""JD"" John","student')
    assert not response.text.endswith("\n")


def test_export_without_rows_is_404(client, admin, auth_headers):
    response = client.get("/api/admin/reports/attendance/export", headers=auth_headers(admin))
    assert response.status_code == 404
    assert response.json()["detail"] == "No data to export"


def test_report_table_and_unknown_type(client, admin, auth_headers, make_student):
    make_student(with_profile=False)
    headers = auth_headers(admin)

    table = client.get("/api/admin/reports/students", headers=headers).json()
    assert table["columns"][0] == "Student ID"
    assert table["rows"][0][1:3] == ["-", "-"]

    assert client.get("/api/admin/reports/grades", headers=headers).status_code == 422


def test_dashboard_counts(client, admin, auth_headers, make_student, school_class):
    make_student(class_id=school_class.id)
    make_student(status="inactive")

    headers = auth_headers(admin)
    counts = client.get("/api/admin/dashboard", headers=headers).json()
    assert counts["total_students"] == 2
    assert counts["total_classes"] == 1

    active = client.get("/api/admin/dashboard", params={"active_only": True}, headers=headers).json()
    assert active["total_students"] == 1


# ---------- circulars ----------

def test_circular_feed_filters_by_audience_and_expiry(client, db, auth_headers, admin, make_profile):
    yesterday = datetime.now(timezone.utc) - timedelta(days=1)
    tomorrow = datetime.now(timezone.utc) + timedelta(days=1)
    db.add_all([
        Circular(title="Holiday", content="...", target_audience=["all"], published_by=admin.id),
        Circular(title="Staff meeting", content="...", target_audience=["faculty"]),
        Circular(title="Exam schedule", content="...", target_audience=["student"], expires_at=tomorrow),
        Circular(title="Old notice", content="...", target_audience=["all"], expires_at=yesterday),
        Circular(title="Draft", content="...", target_audience=["all"], is_active=False),
    ])
    db.commit()
    student = make_profile("student")

    response = client.get("/api/circulars/", headers=auth_headers(student))
    assert response.status_code == 200
    assert [c["title"] for c in response.json()] == ["Exam schedule", "Holiday"]


# ---------- data integrity ----------

@pytest.mark.parametrize("marks", ["-20", "150"])
def test_result_upload_rejects_marks_outside_range(
    client, db, auth_headers, lecturer, make_student, school_class, subject, marks
):
    _, profile = lecturer
    student = make_student(class_id=school_class.id)

    response = client.post(
        "/api/results/",
        json={
            "class_id": school_class.id,
            "subject_id": subject.id,
            "exam_type": "Mid-term",
            "academic_year": "2024-25",
            "entries": [{"student_id": student.id, "marks_obtained": marks}],
        },
        headers=auth_headers(profile),
    )
    assert response.status_code == 422
    assert db.query(Result).count() == 0


def test_result_update_rejects_marks_above_max(
    client, db, auth_headers, lecturer, make_student, school_class, subject
):
    _, profile = lecturer
    student = make_student(class_id=school_class.id)
    uploaded = client.post(
        "/api/results/",
        json={
            "class_id": school_class.id,
            "subject_id": subject.id,
            "exam_type": "Mid-term",
            "academic_year": "2024-25",
            "entries": [{"student_id": student.id, "marks_obtained": "45"}],
        },
        headers=auth_headers(profile),
    ).json()

    response = client.patch(
        f"/api/results/{uploaded[0]['id']}",
        json={"marks_obtained": "150"},
        headers=auth_headers(profile),
    )
    assert response.status_code == 422

    db.expire_all()
    result = db.get(Result, uploaded[0]["id"])
    assert result.grade == "D"
    assert result.marks_obtained == Decimal("45")


def test_deleting_student_removes_dependent_records(client, db, admin, auth_headers, make_student, school_class):
    student = make_student(class_id=school_class.id)
    db.add_all([
        FeeInvoice(student_id=student.id, semester=1, amount=Decimal("500.00"), payment_status="paid"),
        Attendance(student_id=student.id, class_id=school_class.id, date=date(2025, 1, 6), status="present"),
        Result(
            student_id=student.id,
            class_id=school_class.id,
            exam_type="Quiz",
            academic_year="2024-25",
            semester=3,
            marks_obtained=Decimal("8"),
            max_marks=Decimal("10"),
            grade="A",
        ),
    ])
    db.commit()
    old_id = student.id
    headers = auth_headers(admin)

    assert client.delete(f"/api/students/{old_id}", headers=headers).status_code == 200

    db.expire_all()
    assert db.query(FeeInvoice).count() == 0
    assert db.query(Attendance).count() == 0
    assert db.query(Result).count() == 0

    stats = client.get("/api/admin/stats", headers=headers).json()
    assert stats["total_students"] == 0
    assert Decimal(stats["fee_collection"]) == 0

    created = client.post("/api/students/", json={"student_id": "CS-2025-001"}, headers=headers)
    assert created.status_code == 201
    assert created.json()["id"] != old_id


def test_deleting_class_unlinks_students(client, db, admin, auth_headers, make_student, school_class):
    student = make_student(class_id=school_class.id)

    response = client.delete(f"/api/classes/{school_class.id}", headers=auth_headers(admin))
    assert response.status_code == 200

    db.expire_all()
    assert db.get(Student, student.id).class_id is None


def test_student_update_rejects_unknown_class(client, admin, auth_headers, make_student):
    student = make_student()

    response = client.put(f"/api/students/{student.id}", json={"class_id": 999}, headers=auth_headers(admin))
    assert response.status_code == 422
    assert "Class 999" in response.json()["detail"]


def test_money_is_serialized_as_strings(client, db, admin, auth_headers, make_student):
    student = make_student()
    db.add(FeeInvoice(student_id=student.id, semester=1, amount=Decimal("500.00"), payment_status="paid"))
    db.commit()
    headers = auth_headers(admin)

    detail = client.get(f"/api/students/{student.id}", headers=headers).json()
    assert detail["fees"] == {"paid_total": "500.00", "pending_total": "0"}
    assert detail["item"]["fee_invoices"][0]["amount"] == "500.00"

    listing = client.get("/api/fees/", headers=headers).json()
    assert listing["paid_total"] == "500.00"
    assert listing["items"][0]["amount"] == "500.00"

    stats = client.get("/api/admin/stats", headers=headers).json()
    assert stats["fee_collection"] == "500.00"
