from setuptools import setup, find_packages

setup(
    name="archive-podcast-feed",
    version="0.1.0",
    description="Podcast RSS feeds for Internet Archive items",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "fastapi>=0.110.0",
        "uvicorn>=0.27.0",
        "feedgen>=0.9.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "httpx>=0.27.0",
            "feedparser>=6.0.0",
        ],
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "archive-feed=archive_feed.cli:main",
        ],
    },
)
