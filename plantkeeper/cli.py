"""PlantKeeper CLI - main entry point for `plantkeeper`."""


def main():
    """Start the PlantKeeper server."""
    import uvicorn
    from plantkeeper.core.config import get_settings

    settings = get_settings()

    print("PlantKeeper v1")
    print(f"   Starting on http://{settings.host}:{settings.port}")
    print(f"   API Docs:  http://{settings.host}:{settings.port}/docs")
    print("")

    uvicorn.run(
        "plantkeeper.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
