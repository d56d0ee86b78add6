"""GIGFLOW test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/class/function.
- integration/  : Real SQLAlchemy adapters against SQLite and PostgreSQL.
- contract/     : Behaviour every store must share, including concurrency.
- functional/   : The ``gigflow`` CLI driven end-to-end through CliRunner.
- e2e/          : Logging options of the top-level command, observed from outside.
- fixtures/     : Fixture plugins registered in the root conftest.
- helpers/      : Shared utilities (no tests here).

Markers are applied per folder by each folder's conftest.
"""
