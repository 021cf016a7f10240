
INDEX_HTML = """<!DOCTYPE html>
<html>
<head>
	<meta charset="UTF-8">
	<meta name="viewport" content="width=device-width, initial-scale=1">
	<title>Text Upload</title>
	<style>
		* { box-sizing: border-box; margin: 0; padding: 0; }
		body {
			font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Arial, sans-serif;
			background: #eef0f7;
			min-height: 100vh;
			padding: 20px;
		}
		.container {
			max-width: 800px;
			margin: 0 auto;
			background: white;
			border-radius: 12px;
			box-shadow: 0 10px 40px rgba(0,0,0,0.15);
			overflow: hidden;
		}
		.header { background: #5a67d8; color: white; padding: 24px; text-align: center; }
		.header h1 { font-size: 26px; margin-bottom: 6px; }
		.content { padding: 24px; }
		.section { margin-bottom: 24px; padding: 18px; background: #f7f8fa; border-radius: 10px; }
		.section h2 { font-size: 18px; color: #333; margin-bottom: 12px; }
		input, select, textarea, button {
			width: 100%;
			padding: 10px 14px;
			border: 2px solid #dcdfe6;
			border-radius: 8px;
			font-size: 15px;
			font-family: inherit;
			margin-bottom: 10px;
		}
		textarea { min-height: 150px; resize: vertical; }
		button { background: #5a67d8; color: white; border: none; cursor: pointer; font-weight: 600; }
		.status { padding: 10px; margin-top: 8px; border-radius: 8px; text-align: center; font-weight: 600; }
		.status-success { background: #d4edda; color: #155724; }
		.status-error { background: #f8d7da; color: #721c24; }
	</style>
</head>
<body>
	<div class="container">
		<div class="header">
			<h1>📝 Text File Upload</h1>
			<p>Create folders and text files in the library</p>
		</div>
		<div class="content">
			<div class="section">
				<h2>📁 New folder</h2>
				<input type="text" id="newFolder" placeholder="Folder name">
				<button onclick="createFolder()">Create folder</button>
				<div id="folderStatus"></div>
			</div>
			<div class="section">
				<h2>📄 New file</h2>
				<input type="text" id="fileName" placeholder="File name">
				<select id="folderSelect">
					<option value="">-- No folder --</option>
				</select>
				<textarea id="fileContent" placeholder="Text content"></textarea>
				<button onclick="createFile()">Create file</button>
				<div id="fileStatus"></div>
			</div>
		</div>
	</div>
	<script>
		window.addEventListener('load', loadFolders);

		function loadFolders() {
			fetch('/api/folders')
				.then(r => r.json())
				.then(folders => {
					const select = document.getElementById('folderSelect');
					select.innerHTML = '<option value="">-- No folder --</option>';
					folders.forEach(name => {
						const option = document.createElement('option');
						option.value = name;
						option.textContent = name;
						select.appendChild(option);
					});
				})
				.catch(e => console.error('Could not load folders:', e));
		}

		function post(url, payload, statusId, okMessage, onSuccess) {
			fetch(url, {
				method: 'POST',
				headers: { 'Content-Type': 'application/json' },
				body: JSON.stringify(payload)
			})
			.then(r => {
				if (r.ok) {
					showStatus(statusId, okMessage, true);
					onSuccess();
				} else {
					return r.text().then(msg => showStatus(statusId, msg || 'Request failed', false));
				}
			})
			.catch(e => showStatus(statusId, 'Error: ' + e.message, false));
		}

		function createFolder() {
			const name = document.getElementById('newFolder').value.trim();
			if (!name) {
				showStatus('folderStatus', 'Please enter a folder name', false);
				return;
			}
			post('/api/createFolder', { folderName: name }, 'folderStatus', 'Folder created', () => {
				document.getElementById('newFolder').value = '';
				loadFolders();
			});
		}

		function createFile() {
			const fileName = document.getElementById('fileName').value.trim();
			const content = document.getElementById('fileContent').value;
			const folderName = document.getElementById('folderSelect').value;
			if (!fileName) {
				showStatus('fileStatus', 'Please enter a file name', false);
				return;
			}
			const payload = { fileName: fileName, content: content };
			if (folderName) {
				payload.folderName = folderName;
			}
			post('/api/createFile', payload, 'fileStatus', 'File created', () => {
				document.getElementById('fileName').value = '';
				document.getElementById('fileContent').value = '';
				document.getElementById('folderSelect').selectedIndex = 0;
			});
		}

		function showStatus(elementId, message, isSuccess) {
			const div = document.getElementById(elementId);
			div.textContent = message;
			div.className = 'status ' + (isSuccess ? 'status-success' : 'status-error');
			setTimeout(() => { div.textContent = ''; div.className = ''; }, 3000);
		}
	</script>
</body>
</html>
"""

INDEX_HTML_BYTES = INDEX_HTML.encode('utf-8')
