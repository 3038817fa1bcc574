# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Allow ``python -m mentat``."""

from mentat.cli.main import main

if __name__ == "__main__":
    main()
