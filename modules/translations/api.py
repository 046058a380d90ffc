"""HTTP routes of the translation API.

Blocking file and archive work runs in worker threads so unrelated reads
keep being served while a write or a repackage is in flight.
"""

import asyncio

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse, JSONResponse

from api.dependencies.rate_limits import PACKAGE_BUILD_LIMIT, get_limiter
from infrastructure.logging import get_module_logger
from infrastructure.services import TranslationServiceDep
from modules.translations import schemas
from modules.translations.responses import format_error_response, to_response

logger = get_module_logger()
router = APIRouter(tags=["Translations"])
limiter = get_limiter()

SHORT_CACHE = {"Cache-Control": "public, max-age=30"}
LONG_CACHE = {"Cache-Control": "public, max-age=300"}


def _with_download_url(request: Request, result):
    if result.is_success:
        result.data["downloadUrl"] = request.app.url_path_for(
            "download_package_file", file_name=result.data["fileName"]
        )
    return result


@router.get("/health")
async def health():
    return {"status": "ok"}


@router.post("/version/check")
async def check_version(
    body: schemas.VersionCheckRequest, service: TranslationServiceDep
):
    result = await asyncio.to_thread(service.check_version, body.clientVersion)
    return to_response(result)


@router.get("/languages")
async def list_languages(service: TranslationServiceDep):
    result = await asyncio.to_thread(service.list_languages)
    return to_response(result, headers=SHORT_CACHE if result.is_success else None)


@router.get("/language/{code}")
async def get_language(code: str, service: TranslationServiceDep):
    result = await asyncio.to_thread(service.get_language, code)
    return to_response(result)


@router.post("/languages/batch")
async def get_languages_batch(
    body: schemas.BatchLanguagesRequest, service: TranslationServiceDep
):
    result = await asyncio.to_thread(service.get_languages_batch, body.codes)
    return {"success": True, **result.data}


@router.get("/languages/enabled-messages")
async def get_enabled_messages(
    service: TranslationServiceDep, includeDisabled: bool = False
):
    result = await asyncio.to_thread(service.get_enabled_messages, includeDisabled)
    return to_response(result, headers=SHORT_CACHE if result.is_success else None)


@router.get("/data/complete")
async def get_complete_data(
    service: TranslationServiceDep, includeDisabled: bool = False
):
    """Manifest fields and messages at the top level of the body."""
    result = await asyncio.to_thread(service.get_complete_data, includeDisabled)
    if not result.is_success:
        return to_response(result)
    return JSONResponse(content={"success": True, **result.data}, headers=LONG_CACHE)


@router.post("/languages/update")
async def update_language_config(
    body: schemas.LanguageConfigRequest, service: TranslationServiceDep
):
    result = await asyncio.to_thread(
        service.update_language_config,
        body.languages,
        body.defaultLanguage,
        body.fallbackLanguage,
    )
    return to_response(result)


@router.post("/language/{code}/update")
async def replace_language(
    code: str, body: schemas.ReplaceLanguageRequest, service: TranslationServiceDep
):
    result = await asyncio.to_thread(service.replace_language, code, body.translations)
    return to_response(result)


@router.post("/language/{code}/update-key")
async def update_single_key(
    code: str, body: schemas.SingleKeyRequest, service: TranslationServiceDep
):
    result = await asyncio.to_thread(
        service.update_single_key, code, body.key, body.value
    )
    return to_response(result)


@router.post("/languages/create-key")
async def create_key(
    body: schemas.KeyTranslationsRequest, service: TranslationServiceDep
):
    result = await asyncio.to_thread(service.create_key, body.key, body.translations)
    return to_response(result)


@router.put("/languages/update-key")
@router.post("/languages/update-key-batch")
async def update_key(
    body: schemas.KeyTranslationsRequest, service: TranslationServiceDep
):
    result = await asyncio.to_thread(service.update_key, body.key, body.translations)
    return to_response(result)


@router.post("/languages/rename-key")
async def rename_key(body: schemas.RenameKeyRequest, service: TranslationServiceDep):
    result = await asyncio.to_thread(
        service.rename_key, body.oldKey, body.newKey, body.overwrite
    )
    return to_response(result)


@router.post("/languages/delete-key")
async def delete_key(body: schemas.DeleteKeyRequest, service: TranslationServiceDep):
    result = await asyncio.to_thread(service.delete_key, body.key, body.cleanEmpty)
    return to_response(result)


@router.post("/language")
async def add_language(
    body: schemas.AddLanguageRequest, service: TranslationServiceDep
):
    result = await asyncio.to_thread(
        service.add_language,
        body.code,
        body.name,
        body.nativeName,
        body.enabled,
        body.overwrite,
    )
    return to_response(result)


@router.post("/language/{code}/delete")
async def delete_language(code: str, service: TranslationServiceDep):
    result = await asyncio.to_thread(service.delete_language, code)
    return to_response(result)


@router.get("/manifest")
async def get_file_manifest(service: TranslationServiceDep):
    result = await asyncio.to_thread(service.get_file_manifest)
    return to_response(result, headers=SHORT_CACHE if result.is_success else None)


@router.post("/download/create-package")
@limiter.limit(PACKAGE_BUILD_LIMIT)
async def create_package(request: Request, service: TranslationServiceDep):
    result = await asyncio.to_thread(service.create_package)
    return to_response(_with_download_url(request, result))


@router.get("/download/latest")
async def get_latest_package(request: Request, service: TranslationServiceDep):
    result = await asyncio.to_thread(service.get_latest_package)
    return to_response(_with_download_url(request, result))


@router.get("/download/file/{file_name}", name="download_package_file")
async def download_package_file(file_name: str, service: TranslationServiceDep):
    result = await asyncio.to_thread(service.find_package, file_name)
    if not result.is_success:
        logger.info("package_download_missing", file_name=file_name)
        return JSONResponse(
            status_code=404,
            content=format_error_response(result.message, result.error_code),
        )
    return FileResponse(
        result.data,
        media_type="application/zip",
        filename=file_name,
        headers={"Cache-Control": "no-cache"},
    )
