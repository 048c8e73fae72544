from core.permissions import Permission, has_permission

ISSUE_PERMISSIONS = [Permission.MANAGE_ISSUES, Permission.VIEW_ISSUES, Permission.CREATE_ISSUES]


def test_admin_satisfies_any_request():
    assert has_permission(Permission.ADMIN, Permission.MANAGE_ISSUES)
    assert has_permission(Permission.ADMIN, ISSUE_PERMISSIONS, mode="and")


def test_single_permission():
    assert has_permission(Permission.VIEW_ISSUES, Permission.VIEW_ISSUES)
    assert not has_permission(Permission.VIEW_ISSUES, Permission.MANAGE_ISSUES)


def test_or_mode_needs_one():
    assert has_permission(Permission.CREATE_ISSUES, ISSUE_PERMISSIONS, mode="or")
    assert not has_permission(Permission.REQUEST, ISSUE_PERMISSIONS, mode="or")


def test_and_mode_needs_all():
    both = Permission.CREATE_ISSUES | Permission.VIEW_ISSUES
    assert has_permission(both, [Permission.CREATE_ISSUES, Permission.VIEW_ISSUES])
    assert not has_permission(
        Permission.CREATE_ISSUES, [Permission.CREATE_ISSUES, Permission.VIEW_ISSUES]
    )


def test_empty_requirement_is_satisfied():
    assert has_permission(Permission.NONE, [])


def test_plain_int_bitmask():
    stored = int(Permission.MANAGE_ISSUES | Permission.REQUEST)
    assert has_permission(stored, Permission.MANAGE_ISSUES)
    assert not has_permission(0, Permission.REQUEST)


def test_user_model_wrapper():
    from core.models import User

    user = User(email="a@example.com", display_name="A", permissions=int(Permission.VIEW_ISSUES))
    assert user.has_permission(ISSUE_PERMISSIONS, mode="or")
    assert not user.has_permission(Permission.MANAGE_ISSUES)
