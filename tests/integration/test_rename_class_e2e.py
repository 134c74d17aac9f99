from pathlib import Path

import pytest

from railrename.common import L
from railrename.common.transaction import MoveFileOp, RealFileSystem, WriteFileOp
from railrename.refactor import (
    DefinitionNotFoundError,
    FileConflictError,
    FileMissingError,
    InvalidPathError,
    RefactorContext,
    RenameEngine,
    RenameState,
    ReplaceDecision,
    UndecodableFileError,
    UserAbortedError,
)
from railrename.test_utils import ScriptedConfirmation


@pytest.fixture
def project(workspace_factory):
    return (
        workspace_factory.with_rails_skeleton()
        .with_source("app/models/user.rb", "class User < ActiveRecord::Base\nend\n")
        .with_source(
            "app/controllers/users_controller.rb",
            "class UsersController < ApplicationController\n"
            "  def index\n"
            "    @users = User.all\n"
            "  end\n"
            "end\n",
        )
        .with_source(
            "test/unit/user_test.rb",
            "class UserTest < ActiveSupport::TestCase\n  User.new\nend\n",
        )
        .build()
    )


def _engine(root, handler=None, interactive=False):
    return RenameEngine(RefactorContext.from_root(root), handler, interactive=interactive)


def test_rename_class_end_to_end(project):
    result = _engine(project).rename_class("app/models/user.rb", "app/models/account.rb")

    assert result.state == RenameState.DONE
    assert not (project / "app/models/user.rb").exists()
    assert (project / "app/models/account.rb").read_text() == (
        "class Account < ActiveRecord::Base\nend\n"
    )
    controller = (project / "app/controllers/users_controller.rb").read_text()
    assert "@users = Account.all" in controller
    assert "class UsersController" in controller
    unit_test = (project / "test/unit/user_test.rb").read_text()
    assert unit_test == "class UserTest < ActiveSupport::TestCase\n  Account.new\nend\n"

    assert result.ops[0] == MoveFileOp(Path("app/models/user.rb"), Path("app/models/account.rb"))
    written = {op.path.as_posix() for op in result.ops if isinstance(op, WriteFileOp)}
    assert written == {
        "app/models/account.rb",
        "app/controllers/users_controller.rb",
        "test/unit/user_test.rb",
    }
    assert result.warnings == []


def test_nested_module_declaration_is_renamed(workspace_factory):
    root = workspace_factory.with_source(
        "app/controllers/admin/users_controller.rb",
        "module Admin\n  class UsersController < ApplicationController\n  end\nend\n",
    ).build()

    _engine(root).rename_class(
        "app/controllers/admin/users_controller.rb",
        "app/controllers/admin/members_controller.rb",
        rewrite_references=False,
    )

    assert (root / "app/controllers/admin/members_controller.rb").read_text() == (
        "module Admin\n  class MembersController < ApplicationController\n  end\nend\n"
    )


def test_missing_declaration_is_reported_but_file_stays_moved(workspace_factory, spy_bus):
    root = workspace_factory.with_source("lib/legacy_thing.rb", "# nothing here\n").build()

    result = _engine(root).rename_class("lib/legacy_thing.rb", "lib/new_thing.rb")

    assert result.state == RenameState.DONE
    assert len(result.warnings) == 1
    assert isinstance(result.warnings[0], DefinitionNotFoundError)
    assert result.warnings[0].symbol == "LegacyThing"
    assert not (root / "lib/legacy_thing.rb").exists()
    assert (root / "lib/new_thing.rb").read_text() == "# nothing here\n"
    spy_bus.assert_id_called(L.rename.definition.not_found, level="warning")


def test_unclassifiable_path_fails_before_any_mutation(project):
    with pytest.raises(InvalidPathError):
        _engine(project).rename_class("config/routes.rb", "app/models/routes.rb")

    with pytest.raises(InvalidPathError):
        _engine(project).rename_class("app/models/user.rb", "app/views/user.rb")
    assert (project / "app/models/user.rb").exists()


def test_existing_destination_is_a_conflict(project):
    (project / "app/models/account.rb").write_text("class Account; end\n")
    engine = _engine(project)

    with pytest.raises(FileConflictError) as exc_info:
        engine.rename_class("app/models/user.rb", "app/models/account.rb")

    assert exc_info.value.completed_ops == []
    assert engine.state == RenameState.ABORTED
    assert (project / "app/models/user.rb").exists()
    assert (project / "app/models/account.rb").read_text() == "class Account; end\n"


def test_missing_source_file(project):
    with pytest.raises(FileMissingError):
        _engine(project).rename_class("app/models/ghost.rb", "app/models/spirit.rb")


def test_declined_acknowledgment_changes_nothing(project):
    handler = ScriptedConfirmation(acknowledge=False)

    with pytest.raises(UserAbortedError):
        _engine(project, handler, interactive=True).rename_class(
            "app/models/user.rb", "app/models/account.rb"
        )

    assert len(handler.acknowledged) == 1
    assert "app/models/user.rb" in handler.acknowledged[0]
    assert (project / "app/models/user.rb").exists()
    assert not (project / "app/models/account.rb").exists()


def test_declined_reference_leaves_move_in_place(project):
    handler = ScriptedConfirmation([ReplaceDecision.DECLINE])

    result = _engine(project, handler, interactive=True).rename_class(
        "app/models/user.rb", "app/models/account.rb"
    )

    assert result.aborted
    assert result.rewrites[-1].aborted_at == Path("app/controllers/users_controller.rb")
    assert (project / "app/models/account.rb").read_text().startswith("class Account")
    assert "User.all" in (project / "app/controllers/users_controller.rb").read_text()
    assert "User.new" in (project / "test/unit/user_test.rb").read_text()


def test_pending_edits_are_saved_before_renaming(project):
    ctx = RefactorContext.from_root(project)
    ctx.documents.adopt(
        Path("app/models/user.rb"), "class User < ActiveRecord::Base\n  # unsaved\nend\n"
    )

    RenameEngine(ctx, interactive=False).rename_class(
        "app/models/user.rb", "app/models/account.rb"
    )

    assert (project / "app/models/account.rb").read_text() == (
        "class Account < ActiveRecord::Base\n  # unsaved\nend\n"
    )
    assert ctx.documents.get(Path("app/models/account.rb")) is not None


def test_non_utf8_file_is_skipped_and_reported(project):
    legacy = project / "app/views/legacy.html.erb"
    legacy.parent.mkdir(parents=True)
    legacy.write_bytes("<p>caf\xe9 <%= User.count %></p>\n".encode("latin-1"))

    result = _engine(project).rename_class("app/models/user.rb", "app/models/account.rb")

    assert result.state == RenameState.DONE
    assert [(type(w), w.path) for w in result.warnings] == [
        (UndecodableFileError, Path("app/views/legacy.html.erb"))
    ]
    assert legacy.read_bytes() == "<p>caf\xe9 <%= User.count %></p>\n".encode("latin-1")
    assert "Account.new" in (project / "test/unit/user_test.rb").read_text()


class _FailingWrites(RealFileSystem):
    def __init__(self, failing: str):
        self.failing = failing

    def write_text(self, path: Path, content: str) -> None:
        if path.as_posix().endswith(self.failing):
            raise PermissionError(13, "Permission denied", str(path))
        super().write_text(path, content)


def test_write_failure_carries_applied_changes(project):
    ctx = RefactorContext.from_root(
        project, fs=_FailingWrites("app/controllers/users_controller.rb")
    )
    engine = RenameEngine(ctx, interactive=False)

    with pytest.raises(PermissionError) as exc_info:
        engine.rename_class("app/models/user.rb", "app/models/account.rb")

    assert engine.state == RenameState.ABORTED
    assert exc_info.value.completed_ops[0] == MoveFileOp(
        Path("app/models/user.rb"), Path("app/models/account.rb")
    )
    assert (project / "app/models/account.rb").exists()
