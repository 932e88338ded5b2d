"""Static admin page for managing wholesale customers and prices"""

ADMIN_PAGE_HTML = """<!DOCTYPE html>
<html>
<head>
    <title>PeachTree Wholesale Manager</title>
    <style>
        body { font-family: Arial, sans-serif; margin: 40px; }
        .container { max-width: 800px; margin: 0 auto; }
        .form-group { margin-bottom: 20px; }
        label { display: block; margin-bottom: 5px; font-weight: bold; }
        input, button { padding: 10px; margin: 5px 0; }
        button { background: #007cba; color: white; border: none; cursor: pointer; }
        button:hover { background: #005a87; }
        .customer-list, .product-list { margin-top: 30px; }
        .item { padding: 10px; border: 1px solid #ddd; margin: 5px 0; }
    </style>
</head>
<body>
    <div class="container">
        <h1>PeachTree Wholesale Manager</h1>

        <h2>Add Wholesale Customer</h2>
        <div class="form-group">
            <label for="customerEmail">Customer Email:</label>
            <input type="email" id="customerEmail" placeholder="customer@example.com">
            <button onclick="addWholesaleCustomer()">Add Wholesale Customer</button>
        </div>

        <h2>Set Wholesale Price</h2>
        <div class="form-group">
            <label for="productId">Product ID:</label>
            <input type="text" id="productId" placeholder="Product ID">
            <label for="wholesalePrice">Wholesale Price:</label>
            <input type="number" id="wholesalePrice" placeholder="29.99" step="0.01" min="0">
            <button onclick="setWholesalePrice()">Set Wholesale Price</button>
        </div>

        <div class="customer-list">
            <h3>Wholesale Customers</h3>
            <div id="customersList"></div>
        </div>

        <div class="product-list">
            <h3>Wholesale Prices</h3>
            <div id="pricesList"></div>
        </div>
    </div>

    <script>
        function renderItem(text) {
            const div = document.createElement('div');
            div.className = 'item';
            div.textContent = text;
            return div;
        }

        function addWholesaleCustomer() {
            const email = document.getElementById('customerEmail').value;
            if (!email) return;

            fetch('/api/wholesale-customers', {
                method: 'POST',
                headers: { 'Content-Type': 'application/json' },
                body: JSON.stringify({ email })
            })
            .then(response => response.json())
            .then(data => {
                alert(data.success ? 'Customer added successfully!' : 'Failed: ' + data.message);
                loadCustomers();
                document.getElementById('customerEmail').value = '';
            });
        }

        function setWholesalePrice() {
            const productId = document.getElementById('productId').value;
            const price = document.getElementById('wholesalePrice').value;
            if (!productId || !price) return;

            fetch('/api/wholesale-prices', {
                method: 'POST',
                headers: { 'Content-Type': 'application/json' },
                body: JSON.stringify({ productId, price })
            })
            .then(response => response.json())
            .then(data => {
                alert(data.success ? 'Wholesale price set successfully!' : 'Failed: ' + data.message);
                loadPrices();
                document.getElementById('productId').value = '';
                document.getElementById('wholesalePrice').value = '';
            });
        }

        function loadCustomers() {
            fetch('/api/wholesale-customers')
            .then(response => response.json())
            .then(customers => {
                const list = document.getElementById('customersList');
                list.replaceChildren(...customers.map(email => renderItem(email)));
            });
        }

        function loadPrices() {
            fetch('/api/wholesale-prices')
            .then(response => response.json())
            .then(prices => {
                const list = document.getElementById('pricesList');
                list.replaceChildren(...Object.entries(prices).map(([productId, price]) =>
                    renderItem('Product ID: ' + productId + ' - $' + price)
                ));
            });
        }

        loadCustomers();
        loadPrices();
    </script>
</body>
</html>
"""
