[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vaccelrt"
version = "0.1.0"
description = "Acceleration runtime core: sessions, resources, a plugin registry and operation dispatch"
requires-python = ">=3.10"
dependencies = []
keywords = ["acceleration", "runtime", "plugins", "offload", "dispatch"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["vaccelrt"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
