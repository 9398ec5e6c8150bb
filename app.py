from flask import Flask, jsonify

from zkcircuit.linear.field import DEFAULT_MODULUS

from linear_routes import linear_bp


def create_app(config=None):
    app = Flask(__name__)
    app.config["DEFAULT_MODULUS"] = DEFAULT_MODULUS
    app.config["MAX_EXPONENT"] = 1024   # lpow은 지수만큼 곱셈 제약을 만든다
    app.config.from_prefixed_env("ZKCIRCUIT")
    if config:
        app.config.update(config)

    app.register_blueprint(linear_bp)

    @app.route("/")
    def main():
        return jsonify({"service": "zkcircuit", "linear": "/linear/"})

    return app


app = create_app()


if __name__ == "__main__":
    app.run(debug=True)
