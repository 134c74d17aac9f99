from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple


class ArtifactKind(str, Enum):
    MODEL = "model"
    CONTROLLER = "controller"
    HELPER = "helper"
    MAILER = "mailer"
    LIB = "lib"
    UNIT_TEST = "unit_test"
    HELPER_TEST = "helper_test"
    FUNCTIONAL_TEST = "functional_test"
    INTEGRATION_TEST = "integration_test"
    RSPEC_MODEL = "rspec_model"
    RSPEC_CONTROLLER = "rspec_controller"
    RSPEC_HELPER = "rspec_helper"
    RSPEC_LIB = "rspec_lib"


@dataclass(frozen=True)
class KindSpec:
    # Directory the kind lives in, relative to the project root, with a trailing slash.
    prefix: str
    # Appended to a controller's path fragment to locate a companion file.
    companion_suffix: str = ""

    def companion_path(self, fragment: str) -> str:
        return f"{self.prefix}{fragment}{self.companion_suffix}{CLASS_EXTENSION}"


CLASS_EXTENSION = ".rb"

VIEWS_DIR = "app/views/"
LAYOUTS_DIR = "app/views/layouts/"
ROUTES_FILE = "config/routes.rb"

KIND_SPECS: Dict[ArtifactKind, KindSpec] = {
    ArtifactKind.MODEL: KindSpec("app/models/"),
    ArtifactKind.CONTROLLER: KindSpec("app/controllers/", "_controller"),
    ArtifactKind.HELPER: KindSpec("app/helpers/", "_helper"),
    ArtifactKind.MAILER: KindSpec("app/mailers/"),
    ArtifactKind.LIB: KindSpec("lib/"),
    ArtifactKind.UNIT_TEST: KindSpec("test/unit/", "_test"),
    ArtifactKind.HELPER_TEST: KindSpec("test/unit/helpers/", "_helper_test"),
    ArtifactKind.FUNCTIONAL_TEST: KindSpec("test/functional/", "_controller_test"),
    ArtifactKind.INTEGRATION_TEST: KindSpec("test/integration/", "_test"),
    ArtifactKind.RSPEC_MODEL: KindSpec("spec/models/", "_spec"),
    ArtifactKind.RSPEC_CONTROLLER: KindSpec("spec/controllers/", "_controller_spec"),
    ArtifactKind.RSPEC_HELPER: KindSpec("spec/helpers/", "_helper_spec"),
    ArtifactKind.RSPEC_LIB: KindSpec("spec/lib/", "_spec"),
}

# First match wins. A prefix nested inside another kind's directory
# must come before it (test/unit/helpers/ before test/unit/).
CLASSIFY_ORDER: List[ArtifactKind] = [
    ArtifactKind.MODEL,
    ArtifactKind.CONTROLLER,
    ArtifactKind.HELPER,
    ArtifactKind.MAILER,
    ArtifactKind.LIB,
    ArtifactKind.HELPER_TEST,
    ArtifactKind.UNIT_TEST,
    ArtifactKind.FUNCTIONAL_TEST,
    ArtifactKind.INTEGRATION_TEST,
    ArtifactKind.RSPEC_MODEL,
    ArtifactKind.RSPEC_CONTROLLER,
    ArtifactKind.RSPEC_HELPER,
    ArtifactKind.RSPEC_LIB,
]

# Files renamed together with a controller, in rename order.
CONTROLLER_COMPANIONS: Tuple[ArtifactKind, ...] = (
    ArtifactKind.CONTROLLER,
    ArtifactKind.FUNCTIONAL_TEST,
    ArtifactKind.RSPEC_CONTROLLER,
    ArtifactKind.HELPER,
    ArtifactKind.HELPER_TEST,
    ArtifactKind.RSPEC_HELPER,
)

# Directories searched for references to a renamed controller's class names.
CONTROLLER_SYMBOL_SCOPE: Tuple[str, ...] = (
    KIND_SPECS[ArtifactKind.CONTROLLER].prefix,
    KIND_SPECS[ArtifactKind.HELPER].prefix,
    VIEWS_DIR,
    KIND_SPECS[ArtifactKind.FUNCTIONAL_TEST].prefix,
    KIND_SPECS[ArtifactKind.RSPEC_CONTROLLER].prefix,
)

# As above, plus the routing table, for the controller's path fragment.
CONTROLLER_FRAGMENT_SCOPE: Tuple[str, ...] = CONTROLLER_SYMBOL_SCOPE + (ROUTES_FILE,)
