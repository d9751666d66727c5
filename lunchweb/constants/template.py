INDEX_TEMPLATE = """<html>
	<head>
		<title>LunchWeb</title>
		<style>
			* {
				font-family: monospace;
				margin: 0;
				padding: 0;
				line-height: 1.4;
			}
			body {
				padding: 10px;
			}
			a {
				color: #0af;
				font-weight: bold;
				text-decoration: none;
			}
			a:hover { text-decoration: underline; }
		</style>
	</head>
	<body>
		<h2>LunchWeb</h2>
		<p><a href="{{ view.sheet_url }}">Fill in your order</a>
		or <a href="{{ view.mailto }}">send an email</a> with all orders.
		</p>
		<br>
		<p>Orders as of {{ view.now }}:</p>
		<br>
		{% for item in view.line_items %}
		<p>{{ item.name }}: {{ item.order }}</p>
		{% endfor %}
		<br>
		<p>{{ view.order_count }} out of {{ view.max_count }} ordered something (~{{ "%.2f"|format(view.order_percent) }}%)</p>
	</body>
</html>
"""
