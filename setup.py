from setuptools import setup, find_namespace_packages

setup(
    name="reading_log",
    version="0.1.0",
    packages=find_namespace_packages(include=['api*', 'cli*', 'core*']),
    include_package_data=True,
    install_requires=[
        "fastapi",
        "uvicorn",
        "pydantic>=2",
        "python-multipart",  # UploadFile form parsing
        "python-dotenv",
        "Click",
        "SQLAlchemy>=2.0",
        "requests",
        "Pillow",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx",  # fastapi.testclient
        ],
    },
    entry_points={
        "console_scripts": [
            "reading-log=cli.main:main",
        ],
    },
)
