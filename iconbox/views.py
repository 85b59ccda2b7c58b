"""
Static HTML served by the admin page route.

Both pages are fixed payloads with no per-request data. The upload page
does the 108x108 PNG normalisation in the browser (canvas resize onto a
white background) before posting the image, so the server stores the
bytes it receives as-is.
"""

COMMON_STYLE = """
  <style>
    :root { --primary: #2563eb; --bg: #f8fafc; --card: #ffffff; --text: #1e293b; --border: #cbd5e1; }
    body {
        font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
        background: var(--bg);
        display: flex;
        flex-direction: column;
        align-items: center;
        justify-content: center;
        min-height: 100vh;
        margin: 0;
        padding: 1rem;
        box-sizing: border-box;
    }
    .container {
        background: var(--card);
        padding: 2.5rem 2rem;
        border-radius: 20px;
        box-shadow: 0 10px 30px -10px rgba(0, 0, 0, 0.1);
        width: 100%;
        max-width: 400px;
        text-align: center;
    }
    h1 { margin: 0 0 1.5rem 0; font-size: 1.5rem; color: var(--text); font-weight: 700; }

    input[type="text"], input[type="password"] {
        width: 100%; padding: 0.9rem; margin: 0.5rem 0;
        border: 2px solid #e2e8f0; border-radius: 12px;
        box-sizing: border-box; font-size: 1rem; text-align: center;
        transition: all 0.2s;
    }
    input:focus { outline: none; border-color: var(--primary); background: #f0f9ff; }

    button {
        width: 100%; padding: 0.9rem;
        background: var(--primary); color: white;
        border: none; border-radius: 12px;
        font-weight: 600; cursor: pointer; margin-top: 1.5rem;
        font-size: 1rem; transition: transform 0.1s, opacity 0.2s;
    }
    button:active { transform: scale(0.98); }
    button:disabled { background: #94a3b8; cursor: not-allowed; }
  </style>
"""

LOGIN_PAGE = (
    """<!DOCTYPE html>
<html>
<head><title>Sign in to upload</title><meta name="viewport" content="width=device-width, initial-scale=1">"""
    + COMMON_STYLE
    + """</head>
<body>
  <div class="container">
    <h1>Sign in</h1>
    <form action="/auth/login" method="POST">
      <input type="password" name="password" placeholder="Access password" required>
      <button type="submit">Go to upload page</button>
    </form>
  </div>
</body>
</html>
"""
)

LOGIN_FAILED_PAGE = 'Wrong password <a href="/">Back</a>'

UPLOAD_PAGE = (
    """<!DOCTYPE html>
<html>
<head><title>Icon upload</title><meta name="viewport" content="width=device-width, initial-scale=1">"""
    + COMMON_STYLE
    + """
<style>
  #drop-area {
    width: 100%;
    height: 180px;
    border: 3px dashed var(--border);
    border-radius: 16px;
    margin: 1.5rem 0;
    display: flex;
    flex-direction: column;
    align-items: center;
    justify-content: center;
    cursor: pointer;
    background: #f8fafc;
    transition: all 0.2s;
    position: relative;
    overflow: hidden;
  }
  #drop-area.highlight { border-color: var(--primary); background: #eff6ff; }
  #drop-area:hover { border-color: var(--primary); }

  .upload-icon { font-size: 3rem; color: #94a3b8; margin-bottom: 0.5rem; }
  .upload-text { color: #64748b; font-size: 0.9rem; }

  #preview-img {
    position: absolute; top: 0; left: 0; width: 100%; height: 100%;
    object-fit: contain; background: white; display: none; padding: 10px; box-sizing: border-box;
  }

  .error-msg { color: #ef4444; font-size: 0.85rem; margin-top: 0.5rem; min-height: 1.2em; }
</style>
</head>
<body>
  <div class="container">
    <h1>Icon upload</h1>

    <input type="text" id="iconName" placeholder="Icon name (letters only)" autocomplete="off" oninput="validateName(this)">
    <div class="error-msg" id="nameError"></div>

    <input type="file" id="fileInput" accept="image/*" style="display:none">

    <div id="drop-area">
        <div class="upload-icon">&#9729;</div>
        <div class="upload-text">Click or drop an image here</div>
        <img id="preview-img">
    </div>

    <button id="uploadBtn" disabled onclick="upload()">Upload</button>
  </div>

  <script>
    const ICON_SIZE = 108;
    let processedBlob = null;
    const dropArea = document.getElementById('drop-area');
    const fileInput = document.getElementById('fileInput');
    const previewImg = document.getElementById('preview-img');
    const uploadBtn = document.getElementById('uploadBtn');
    const nameInput = document.getElementById('iconName');
    const nameError = document.getElementById('nameError');

    function validateName(input) {
        const original = input.value;
        const clean = original.replace(/[^a-zA-Z]/g, '');
        if (original !== clean) {
            input.value = clean;
            nameError.innerText = "Non-letter characters were removed";
        } else {
            nameError.innerText = "";
        }
        checkSubmit();
    }

    dropArea.addEventListener('click', () => fileInput.click());

    ['dragenter', 'dragover', 'dragleave', 'drop'].forEach(eventName => {
        dropArea.addEventListener(eventName, preventDefaults, false);
    });
    function preventDefaults(e) { e.preventDefault(); e.stopPropagation(); }

    ['dragenter', 'dragover'].forEach(eventName => {
        dropArea.addEventListener(eventName, () => dropArea.classList.add('highlight'), false);
    });
    ['dragleave', 'drop'].forEach(eventName => {
        dropArea.addEventListener(eventName, () => dropArea.classList.remove('highlight'), false);
    });

    dropArea.addEventListener('drop', (e) => handleFiles(e.dataTransfer.files));
    fileInput.addEventListener('change', function() { handleFiles(this.files); });

    function handleFiles(files) {
        if (files.length > 0) {
            processImage(files[0]);
        }
    }

    function processImage(file) {
        const reader = new FileReader();
        reader.onload = function(event) {
            const img = new Image();
            img.onload = function() {
                const canvas = document.createElement('canvas');
                canvas.width = ICON_SIZE;
                canvas.height = ICON_SIZE;
                const ctx = canvas.getContext('2d');
                ctx.fillStyle = "#ffffff";
                ctx.fillRect(0, 0, ICON_SIZE, ICON_SIZE);
                ctx.drawImage(img, 0, 0, ICON_SIZE, ICON_SIZE);

                canvas.toBlob((blob) => {
                    processedBlob = blob;
                    previewImg.src = URL.createObjectURL(blob);
                    previewImg.style.display = 'block';
                    checkSubmit();
                }, 'image/png', 0.9);
            };
            img.src = event.target.result;
        };
        reader.readAsDataURL(file);
    }

    function checkSubmit() {
        if (processedBlob && nameInput.value.length > 0) {
            uploadBtn.disabled = false;
            uploadBtn.innerText = "Upload";
        } else {
            uploadBtn.disabled = true;
        }
    }

    async function upload() {
        const name = nameInput.value.trim();
        if (!name || !processedBlob) return;

        uploadBtn.disabled = true;
        uploadBtn.innerText = 'Uploading...';

        const formData = new FormData();
        formData.append('file', processedBlob, name + '.png');
        formData.append('name', name);

        try {
            const res = await fetch('/api/upload', { method: 'POST', body: formData });
            if (res.ok) {
                alert('Upload complete!');
                location.reload();
            } else if (res.status === 400) {
                alert('The name contains invalid characters, please check it');
            } else {
                alert('Upload failed');
            }
        } catch (e) {
            alert('Network error');
        } finally {
            uploadBtn.disabled = false;
            uploadBtn.innerText = 'Upload';
        }
    }
  </script>
</body>
</html>
"""
)
