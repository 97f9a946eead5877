from fintrack import create_app

# `flask --app app run` picks this up; data lives in FINTRACK_DATA_FILE.
app = create_app()

# ---------------- MAIN ---------------- #
if __name__ == "__main__":
    app.run(host=app.config["HOST"], port=app.config["PORT"])
