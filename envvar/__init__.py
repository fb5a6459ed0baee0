"""
envvar - Application configuration from environment variables

Loads a nested application configuration from system environment
variables, driven by a declarative schema. Typically run once at process
startup, before anything reads its configuration.

envvar provides:
  - Conventional variable names derived from the schema path
  - Typed conversion (string, integer, float, boolean, tuple, list)
  - Default values written in environment-variable form
  - Deep merge into an existing configuration without clobbering it
  - Optional enforcement that every required value is present

Quick Start
-----------
List the variables a schema reads:

    $ envvar show-vars config/env_schema.yaml beowulf

Resolve against the current environment:

    $ envvar load config/env_schema.yaml beowulf --config config/base.yaml

Package Structure
-----------------
provider : module
    init/load entry points and the show_vars diagnostic.
schema : module
    Schema trees, YAML schema files and schema references.
types : module
    Type descriptors and string conversion.
naming : module
    Environment variable name derivation.
walker : module
    Schema traversal against the environment.
merge : module
    Deep merge of configuration trees.
store : module
    Explicit application configuration store.
cli : module
    Command-line interface with argparse.

Public API
----------
    from envvar import init, load, show_vars
    from envvar.store import ConfigStore
    from envvar.exceptions import ConversionError, EnforcementError
"""

__version__ = "0.3.0"
__license__ = "Apache-2.0"
__description__ = "Load application configuration from environment variables"

from envvar.provider import ProviderState, apply, init, load, show_vars
from envvar.store import ConfigStore

__all__ = [
    "__version__",
    "__license__",
    "__description__",
    "ProviderState",
    "init",
    "load",
    "apply",
    "show_vars",
    "ConfigStore",
]
