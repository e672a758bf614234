from src.car_rental.car_rental.main import create_app

app = create_app()


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=8080, debug=bool(app.config.get("DEBUG", False)))
