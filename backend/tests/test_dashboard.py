import httpx
import pytest
from conftest import PASSWORD

from roster.api.schemas.employees import EmployeeRequest
from roster.client.api import RosterClient
from roster.client.dashboard import Dashboard
from roster.client.notify import LogNotifier
from roster.core.constants import NotificationVariant
from roster.core.errors import ConflictError, UnauthorizedError
from roster.main import app

pytestmark = pytest.mark.anyio


def employee(first="Jane", last="Doe", email="jane@x.com", department="Engineering", salary=80000):
    return EmployeeRequest(
        first_name=first, last_name=last, email=email, department=department, salary=salary
    )


@pytest.fixture
async def api(session_factory):
    transport = httpx.ASGITransport(app=app)
    async with RosterClient("http://testserver", transport=transport) as client:
        await client.register("Owner", "owner@example.com", PASSWORD)
        await client.login("owner@example.com", PASSWORD)
        yield client


@pytest.fixture
def notifier():
    return LogNotifier()


@pytest.fixture
async def dashboard(api, notifier):
    board = Dashboard(api, notifier)
    assert await board.start()
    return board


async def test_start_without_session_reports_login_needed(session_factory):
    transport = httpx.ASGITransport(app=app)
    async with RosterClient("http://testserver", transport=transport) as client:
        board = Dashboard(client)
        assert await board.start() is False


async def test_client_raises_typed_errors(api):
    await api.create_employee(employee())
    with pytest.raises(ConflictError) as exc_info:
        await api.create_employee(employee(email="JANE@x.com"))
    assert exc_info.value.message == "An employee with this email already exists."

    await api.logout()
    with pytest.raises(UnauthorizedError):
        await api.me()


async def test_add_employee_updates_cache_and_view(dashboard, notifier):
    created = await dashboard.add_employee(employee())

    assert created is not None
    assert [e.id for e in dashboard.cache.employees] == [created.id]
    assert dashboard.view.total_results == 1
    assert notifier.last.title == "Employee Added"
    assert notifier.last.description == "Jane Doe has been added successfully."


async def test_duplicate_email_caught_before_request(dashboard, notifier):
    await dashboard.add_employee(employee(email="a@x.com"))
    result = await dashboard.add_employee(employee(first="Other", email="A@X.com"))

    assert result is None
    assert len(dashboard.cache) == 1
    assert notifier.last.title == "Duplicate Email"
    assert notifier.last.is_error


async def test_server_conflict_leaves_cache_unchanged(dashboard, notifier, api):
    await api.create_employee(employee(email="a@x.com"))
    assert len(dashboard.cache) == 0

    result = await dashboard.add_employee(employee(email="a@x.com"))

    assert result is None
    assert len(dashboard.cache) == 0
    assert notifier.last.title == "Error"
    assert notifier.last.description == "An employee with this email already exists."
    assert notifier.last.variant == NotificationVariant.DESTRUCTIVE


async def test_edit_employee_replaces_cached_row(dashboard, notifier):
    created = await dashboard.add_employee(employee())
    updated = await dashboard.edit_employee(created.id, employee(department="Finance"))

    assert updated.department == "Finance"
    assert dashboard.cache.find(created.id).department == "Finance"
    assert notifier.last.title == "Employee Updated"


async def test_failed_edit_keeps_cached_row(dashboard, notifier):
    await dashboard.add_employee(employee(email="a@x.com"))
    second = await dashboard.add_employee(employee(first="Bob", email="b@x.com"))

    assert await dashboard.edit_employee(second.id, employee(first="Bob", email="a@x.com")) is None
    assert dashboard.cache.find(second.id).email == "b@x.com"
    assert notifier.last.is_error


async def test_delete_employee(dashboard, notifier):
    created = await dashboard.add_employee(employee())

    assert await dashboard.delete_employee(created.id)
    assert len(dashboard.cache) == 0
    assert notifier.last.title == "Employee Deleted"
    assert notifier.last.description == "Jane Doe has been removed."
    assert await dashboard.delete_employee(created.id) is False


async def test_view_inputs_drive_pipeline(dashboard):
    await dashboard.add_employee(employee())
    await dashboard.add_employee(employee("Raj", "Kumar", "raj@x.com", "Finance", 65000))
    await dashboard.add_employee(employee("Ann", "Lee", "ann@x.com", "Engineering", 120000))

    assert dashboard.departments() == ["Engineering", "Finance"]

    result = dashboard.filter_department("Engineering")
    assert [e.first_name for e in result.rows] == ["Ann", "Jane"]

    dashboard.sort_by("salary")
    result = dashboard.sort_by("salary")
    assert [e.salary for e in result.rows] == [120000, 80000]

    result = dashboard.search("raj")
    assert result.total_results == 0


async def test_paging_through_dashboard(dashboard):
    for i in range(12):
        await dashboard.add_employee(employee(f"P{i:02d}", "Person", f"p{i}@x.com"))

    dashboard.set_page_size(5)
    assert dashboard.view.total_pages == 3
    assert dashboard.next_page().page == 2
    assert dashboard.next_page().page == 3
    assert dashboard.next_page().page == 3
    assert len(dashboard.view.rows) == 2
    assert dashboard.previous_page().page == 2


async def test_export_writes_filtered_view(dashboard, notifier, tmp_path):
    await dashboard.add_employee(employee())
    await dashboard.add_employee(employee("Raj", "Kumar", "raj@x.com", "Finance", 65000))
    dashboard.filter_department("Finance")

    target = tmp_path / "out.csv"
    data = dashboard.export("csv", target)

    assert target.read_bytes() == data
    assert data.decode("utf-8").splitlines()[1:] == ['"Raj Kumar","raj@x.com","Finance","65000"']
    assert notifier.last.title == "CSV Exported"


async def test_export_failure_is_reported(dashboard, notifier, tmp_path):
    result = dashboard.export("xlsx", tmp_path / "missing" / "out.xlsx")
    assert result is None
    assert notifier.last.description == "Failed to export to Excel"


async def test_server_side_export_matches(api):
    await api.create_employee(employee())
    data = await api.export_employees("csv", search="jane")
    assert data.decode("utf-8").splitlines()[1] == '"Jane Doe","jane@x.com","Engineering","80000"'


async def test_set_sort_on_default_column_stays_ascending(dashboard):
    await dashboard.add_employee(employee("Zed", "Young", "zed@x.com"))
    await dashboard.add_employee(employee("Amy", "Brown", "amy@x.com"))

    result = dashboard.set_sort("name")
    assert [e.first_name for e in result.rows] == ["Amy", "Zed"]

    dashboard.set_sort("salary", "desc")
    assert dashboard.state.sort_direction == "desc"
