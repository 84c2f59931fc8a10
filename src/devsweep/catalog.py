"""Static collector definitions for devsweep.

Each entry says where one technology keeps its reclaimable data and how
risky removing it is. Fixed paths support ~ expansion; patterns are
matched against base names under the scan roots.
"""

from devsweep.models import CollectorSpec, Domain, PathRule, PatternRule, SafetyLevel

SAFE = SafetyLevel.SAFE
MODERATE = SafetyLevel.MODERATE
DANGEROUS = SafetyLevel.DANGEROUS

# Registry order is the report and cleaning order
COLLECTOR_SPECS: dict[str, CollectorSpec] = {
    # =============================================================================
    # SYSTEM
    # =============================================================================
    "trash": CollectorSpec(
        id="trash",
        name="Trash",
        domain=Domain.SYSTEM,
        always=True,
        paths=[
            PathRule(path="~/.Trash", description="User trash"),
            PathRule(path="~/.local/share/Trash", description="User trash"),
        ],
    ),
    "system_caches": CollectorSpec(
        id="system_caches",
        name="System Caches",
        domain=Domain.SYSTEM,
        always=True,
        paths=[
            PathRule(path="~/Library/Caches", description="User caches"),
            PathRule(path="/Library/Caches", description="System caches", safety=MODERATE),
        ],
    ),
    "system_logs": CollectorSpec(
        id="system_logs",
        name="System Logs",
        domain=Domain.SYSTEM,
        always=True,
        paths=[
            PathRule(path="~/Library/Logs", description="User log files", safety=MODERATE),
            PathRule(path="/private/var/log/asl", description="ASL log files", safety=MODERATE),
        ],
    ),
    "homebrew": CollectorSpec(
        id="homebrew",
        name="Homebrew Cache",
        domain=Domain.SYSTEM,
        commands=["brew"],
        paths=[
            PathRule(path="~/Library/Caches/Homebrew", description="Homebrew cache"),
            PathRule(path="~/.cache/Homebrew", description="Homebrew cache"),
        ],
    ),
    "launchpad": CollectorSpec(
        id="launchpad",
        name="Launchpad Database",
        domain=Domain.SYSTEM,
        detect_paths=["~/Library/Application Support/Dock"],
        paths=[
            PathRule(
                path="~/Library/Application Support/Dock",
                description="Launchpad database (will be rebuilt)",
                safety=DANGEROUS,
            ),
        ],
    ),
    "ios_backups": CollectorSpec(
        id="ios_backups",
        name="iOS Backups",
        domain=Domain.SYSTEM,
        detect_paths=["~/Library/Application Support/MobileSync"],
        paths=[
            PathRule(
                path="~/Library/Application Support/MobileSync/Backup",
                description="iOS device backups (DANGEROUS - may contain important data)",
                safety=DANGEROUS,
            ),
        ],
    ),
    # =============================================================================
    # FRONTEND - Node.js, npm, yarn, pnpm
    # =============================================================================
    "frontend": CollectorSpec(
        id="frontend",
        name="Frontend",
        domain=Domain.FRONTEND,
        commands=["node", "npm", "yarn", "pnpm", "bun"],
        paths=[
            PathRule(path="~/.npm", description="npm cache"),
            PathRule(path="~/.cache/yarn", description="Yarn cache"),
            PathRule(path="~/Library/Caches/Yarn", description="Yarn global cache"),
            PathRule(path="~/.pnpm-store", description="pnpm store"),
            PathRule(path="~/.bun/install/cache", description="Bun install cache"),
        ],
        patterns=[
            PatternRule(
                pattern="node_modules",
                description="node_modules dependencies",
                safety=MODERATE,
                skip_inside="node_modules",
            ),
            PatternRule(pattern="dist", description="Build output (dist)", marker="package.json"),
            PatternRule(pattern="build", description="Build output (build)", marker="package.json"),
            PatternRule(pattern="out", description="Build output (out)", marker="package.json"),
            PatternRule(pattern=".next", description="Next.js build cache"),
            PatternRule(pattern=".nuxt", description="Nuxt build cache"),
            PatternRule(pattern=".vite", description="Vite cache"),
            PatternRule(pattern=".parcel-cache", description="Parcel cache"),
            PatternRule(pattern=".turbo", description="Turborepo cache"),
            PatternRule(pattern="coverage", description="Test coverage reports", marker="package.json"),
            PatternRule(pattern=".nyc_output", description="NYC coverage output"),
            PatternRule(pattern=".eslintcache", description="ESLint cache"),
            PatternRule(pattern="storybook-static", description="Storybook static build"),
            PatternRule(pattern="npm-debug.log*", description="npm debug logs"),
            PatternRule(pattern="yarn-error.log*", description="Yarn error logs"),
            PatternRule(pattern="yarn-debug.log*", description="Yarn debug logs"),
        ],
    ),
    # =============================================================================
    # BACKEND - Python, Java, Go, Rust, PHP, Ruby
    # =============================================================================
    "backend": CollectorSpec(
        id="backend",
        name="Backend",
        domain=Domain.BACKEND,
        commands=["python3", "python", "java", "go", "cargo", "php", "ruby"],
        paths=[
            PathRule(path="~/Library/Caches/pip", description="pip cache"),
            PathRule(path="~/.cache/pip", description="pip cache"),
            PathRule(path="~/Library/Caches/pypoetry", description="Poetry cache"),
            PathRule(path="~/.cache/pypoetry", description="Poetry cache"),
            PathRule(path="~/.cache/uv", description="uv cache"),
            PathRule(path="~/.m2/repository", description="Maven local repository", safety=MODERATE),
            PathRule(path="~/.gradle/caches", description="Gradle cache"),
            PathRule(path="~/Library/Caches/go-build", description="Go build cache"),
            PathRule(path="~/.cache/go-build", description="Go build cache"),
            PathRule(path="~/go/pkg/mod", description="Go module cache", safety=MODERATE),
            PathRule(path="~/.cargo/registry", description="Cargo registry cache"),
            PathRule(path="~/.composer/cache", description="Composer cache"),
            PathRule(path="~/.gem/cache", description="Ruby gem cache"),
            PathRule(path="~/.bundle/cache", description="Bundler cache"),
        ],
        patterns=[
            PatternRule(pattern="__pycache__", description="Python bytecode cache"),
            PatternRule(pattern="*.pyc", description="Python compiled files"),
            PatternRule(pattern=".pytest_cache", description="pytest cache"),
            PatternRule(pattern=".mypy_cache", description="mypy type checker cache"),
            PatternRule(pattern=".ruff_cache", description="Ruff linter cache"),
            PatternRule(pattern=".tox", description="tox test environments"),
            PatternRule(
                pattern="target",
                description="Rust build output (target)",
                safety=MODERATE,
                marker="Cargo.toml",
            ),
            PatternRule(
                pattern="vendor",
                description="PHP vendor dependencies",
                safety=MODERATE,
                marker="composer.json",
            ),
        ],
    ),
    # =============================================================================
    # MOBILE - Xcode, Android, Flutter
    # =============================================================================
    "mobile": CollectorSpec(
        id="mobile",
        name="Mobile",
        domain=Domain.MOBILE,
        commands=["xcodebuild", "adb", "flutter"],
        detect_paths=["/Applications/Xcode.app", "~/Library/Android"],
        paths=[
            PathRule(
                path="~/Library/Developer/Xcode/DerivedData",
                description="Xcode DerivedData (rebuilds automatically)",
            ),
            PathRule(
                path="~/Library/Developer/Xcode/Archives",
                description="Xcode Archives (old app versions)",
                safety=MODERATE,
            ),
            PathRule(
                path="~/Library/Developer/Xcode/iOS DeviceSupport",
                description="iOS Device Support symbols",
            ),
            PathRule(
                path="~/Library/Developer/Xcode/watchOS DeviceSupport",
                description="watchOS Device Support symbols",
            ),
            PathRule(
                path="~/Library/Developer/Xcode/tvOS DeviceSupport",
                description="tvOS Device Support symbols",
            ),
            PathRule(
                path="~/Library/Developer/CoreSimulator/Caches",
                description="iOS Simulator caches",
                safety=MODERATE,
            ),
            PathRule(
                path="~/Library/Developer/CoreSimulator/Devices",
                description="iOS Simulator devices (can be recreated)",
                safety=MODERATE,
            ),
            PathRule(path="~/Library/Caches/com.apple.dt.Xcode", description="Xcode general cache"),
            PathRule(path="~/Library/Android/sdk/build-cache", description="Android SDK build cache"),
            PathRule(path="~/.android/avd", description="Android Virtual Devices", safety=MODERATE),
            PathRule(path="~/Library/Caches/CocoaPods", description="CocoaPods cache"),
        ],
        patterns=[
            PatternRule(pattern="build", description="Android build output", marker="build.gradle"),
            PatternRule(pattern="build", description="Flutter build output", marker="pubspec.yaml"),
            PatternRule(pattern=".dart_tool", description="Flutter/Dart build cache"),
        ],
    ),
    # =============================================================================
    # DEVOPS - Kubernetes, Terraform, cloud CLIs
    # =============================================================================
    "devops": CollectorSpec(
        id="devops",
        name="DevOps",
        domain=Domain.DEVOPS,
        commands=["docker", "kubectl", "terraform", "helm", "vagrant"],
        paths=[
            PathRule(path="~/.kube/cache", description="Kubernetes cache"),
            PathRule(path="~/.minikube/cache", description="Minikube cache", safety=MODERATE),
            PathRule(path="~/.aws/cli/cache", description="AWS CLI cache"),
            PathRule(path="~/.cache/helm", description="Helm cache"),
            PathRule(path="~/Library/Caches/helm", description="Helm cache"),
            PathRule(path="~/.vagrant.d/boxes", description="Vagrant boxes", safety=MODERATE),
            PathRule(
                path="~/.minikube/machines",
                description="Minikube VMs (DANGEROUS - cluster state is lost)",
                safety=DANGEROUS,
            ),
        ],
        patterns=[
            PatternRule(
                pattern=".terraform",
                description="Terraform providers and modules",
                safety=MODERATE,
            ),
        ],
    ),
    # =============================================================================
    # DATA/ML - Conda, Jupyter, TensorFlow, PyTorch
    # =============================================================================
    "dataml": CollectorSpec(
        id="dataml",
        name="Data/ML",
        domain=Domain.DATAML,
        commands=["conda", "mamba", "jupyter"],
        paths=[
            PathRule(path="~/.conda/pkgs", description="Conda package cache"),
            PathRule(path="~/.conda/envs/.pkgs", description="Conda environments tarball cache"),
            PathRule(path="~/.mamba/pkgs", description="Mamba/Miniforge package cache"),
            PathRule(path="~/Library/Jupyter/runtime", description="Jupyter runtime files"),
            PathRule(
                path="~/Library/Jupyter/kernels",
                description="Jupyter kernels cache",
                safety=MODERATE,
            ),
            PathRule(path="~/.keras/datasets", description="Keras/TensorFlow datasets cache"),
            PathRule(path="~/.keras/models", description="Keras/TensorFlow models cache"),
            PathRule(path="~/.cache/torch/hub", description="PyTorch Hub cache (pretrained models)"),
            PathRule(path="~/.cache/huggingface", description="Hugging Face transformers cache"),
            PathRule(path="~/.cache/wandb", description="Weights & Biases cache"),
        ],
        patterns=[
            PatternRule(pattern=".ipynb_checkpoints", description="Jupyter notebook checkpoints"),
            PatternRule(pattern="wandb", description="W&B experiment logs", safety=MODERATE),
            PatternRule(pattern="mlruns", description="MLflow experiment runs", safety=MODERATE),
            PatternRule(pattern=".DS_Store", description="macOS metadata files"),
        ],
    ),
}


def get_spec(spec_id: str) -> CollectorSpec | None:
    """Get a collector definition by ID."""
    return COLLECTOR_SPECS.get(spec_id)


def get_all_specs() -> list[CollectorSpec]:
    """Get all collector definitions in registry order."""
    return list(COLLECTOR_SPECS.values())


def get_specs_for_domain(domain: Domain) -> list[CollectorSpec]:
    """Get the collector definitions of one domain."""
    return [s for s in COLLECTOR_SPECS.values() if s.domain == domain]
