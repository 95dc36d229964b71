import hydra
from omegaconf import DictConfig
import pyrootutils

# project root setup
root = pyrootutils.setup_root(__file__, dotenv=True, pythonpath=True)

from drawskrit.core import export_image, render_program  # noqa: E402


@hydra.main(version_base=None, config_path="config", config_name="run")
def main(cfg: DictConfig) -> None:

    # Instantiate the renderer from config
    renderer = hydra.utils.instantiate(cfg.renderer)

    # Parse, lay out and paint the sketch.
    sketch_path = root / cfg.sketch.input
    program_string = sketch_path.read_text(encoding="utf-8")
    image_array = render_program(renderer, program_string, cfg.sketch.width, cfg.sketch.height)
    export_image(image_array, str(root / cfg.sketch.output))
    print(f"✅ Sketch '{cfg.sketch.input}' rendered to {cfg.sketch.output}")


if __name__ == "__main__":
    main()
