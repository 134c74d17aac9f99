import pytest

from railrename.convention import (
    ArtifactClassifier,
    ArtifactKind,
    Classification,
    ProjectScanner,
    classify,
)


@pytest.mark.parametrize(
    "path, kind, symbol",
    [
        ("app/models/foo_bar.rb", ArtifactKind.MODEL, "FooBar"),
        ("app/controllers/foo/bar_controller.rb", ArtifactKind.CONTROLLER, "Foo::BarController"),
        ("app/helpers/foo_helper.rb", ArtifactKind.HELPER, "FooHelper"),
        ("app/mailers/notifier.rb", ArtifactKind.MAILER, "Notifier"),
        ("lib/foo/bar/quux.rb", ArtifactKind.LIB, "Foo::Bar::Quux"),
        ("test/unit/foo_test.rb", ArtifactKind.UNIT_TEST, "FooTest"),
        ("test/unit/helpers/foo_helper_test.rb", ArtifactKind.HELPER_TEST, "FooHelperTest"),
        ("test/functional/foo_controller_test.rb", ArtifactKind.FUNCTIONAL_TEST, "FooControllerTest"),
        ("spec/models/foo_spec.rb", ArtifactKind.RSPEC_MODEL, "FooSpec"),
        ("spec/controllers/foo_controller_spec.rb", ArtifactKind.RSPEC_CONTROLLER, "FooControllerSpec"),
        ("spec/helpers/foo_helper_spec.rb", ArtifactKind.RSPEC_HELPER, "FooHelperSpec"),
    ],
)
def test_classify_known_locations(path, kind, symbol):
    assert classify(path) == Classification(kind, symbol)


@pytest.mark.parametrize(
    "path",
    [
        "app/views/foo/index.html.erb",
        "config/routes.rb",
        "app/models/readme.txt",
        "vendor/plugins/foo/init.rb",
        "app/models/.rb",
    ],
)
def test_classify_returns_none_for_non_class_files(path):
    assert classify(path) is None


def test_nested_prefix_takes_precedence_over_its_parent():
    # test/unit/helpers/ is listed before test/unit/, so it wins.
    result = classify("test/unit/helpers/foo_helper_test.rb")
    assert result.kind == ArtifactKind.HELPER_TEST


def test_list_class_files_keeps_only_ruby_sources(workspace_factory):
    root = (
        workspace_factory.with_source("app/models/user.rb", "class User; end")
        .with_source("app/views/users/index.html.erb", "<%= @users %>")
        .with_source("lib/tasks/cleanup.rake", "task :cleanup")
        .with_source("lib/tasks/cleanup_flymake.rb", "")
        .build()
    )
    classifier = ArtifactClassifier(ProjectScanner(root))

    assert [p.as_posix() for p in classifier.list_class_files()] == ["app/models/user.rb"]
