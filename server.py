from image_insight import create_app

# Initialize Flask app from the environment (.env is loaded by image_insight.config.env_config)
app = create_app()

if __name__ == '__main__':
    app.run(debug=True)
