"""Run the accessible blog HTTP service until SIGINT or SIGTERM."""

import sys

from blog_a11y.service import main as service_main


def main():
    """Start the blog service: load posts, serve the reader API and announcements."""
    try:
        service_main()
    except KeyboardInterrupt:
        print("\nService interrupted by user")
        sys.exit(0)
    except Exception as e:
        print(f"Service failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
