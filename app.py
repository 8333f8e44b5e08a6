"""Root-level entry point for Streamlit Cloud deployment.

This file serves as the entry point for Streamlit Cloud. It imports and runs
the planner from the freedom_number package.
"""

from freedom_number.main import main

if __name__ == "__main__":
    main()
