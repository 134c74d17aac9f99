from railrename.test_utils.fixtures import spy_bus, workspace_factory  # noqa: F401
