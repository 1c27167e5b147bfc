import os, getopt, sys, time

from tqdm import tqdm

import pet_pad as pp
from pad_config import *

USAGE = ('-i <infile> [-o <outfile>] [-d <datadir>] [--water ml] [--elapsed min] '
         '[--meal min] [--time HH:MM] [--confirm] [--calendar] [--stats] '
         '[--export <file>] [--clear]')

sampler = pp.RegionSampler(roi_ratio, min_luma, max_luma, fallback_luma, min_pixels)
decoder = pp.ImageDecoder(canvas_size)


def print_calendar(monitor):
    for cell in monitor.calendar(calendar_days):
        print(cell['title'])


def print_stats(monitor):
    view = monitor.stats()
    for level, label in enumerate(pp.LEVEL_LABELS):
        print(f'{label}: {view["counts"][level]}회')

    frame = pp.series_frame(view)
    if not view['has_ph']:
        frame = frame.drop(columns=['ph'])
    print(frame.to_string(index=False))


def render(view, monitor):
    # 출력 오류가 기록을 건드리지 않도록 여기서 처리
    try:
        view(monitor)
    except Exception as exc:
        print(f'런타임 오류가 감지되었어요: {exc}', file=sys.stderr)


def main(argv, report):
    FILENAME = argv[0]
    INFILE = ''
    OUTFILE = 'estimate.csv'
    DATADIR = data_dir
    EXPORT = ''
    inputs = {}
    confirm = show_calendar = show_stats = clear = False

    try:
        opts, etc_args = getopt.getopt(argv[1:], 'i:o:d:',
                                       ['infile=', 'out=', 'data=', 'water=', 'elapsed=', 'meal=',
                                        'time=', 'confirm', 'calendar', 'stats', 'export=', 'clear'])
    except getopt.GetoptError:
        print(FILENAME, USAGE)
        sys.exit(-1)

    for opt, arg in opts:
        if opt in ('-i', '--infile'):
            INFILE = arg
        elif opt in ('-o', '--out'):
            OUTFILE = arg
        elif opt in ('-d', '--data'):
            DATADIR = arg
        elif opt == '--water':
            inputs['water_intake'] = arg
        elif opt == '--elapsed':
            inputs['elapsed_time'] = arg
        elif opt == '--meal':
            inputs['after_meal_time'] = arg
        elif opt == '--time':
            inputs['input_time'] = arg
        elif opt == '--confirm':
            confirm = True
        elif opt == '--calendar':
            show_calendar = True
        elif opt == '--stats':
            show_stats = True
        elif opt == '--export':
            EXPORT = arg
        elif opt == '--clear':
            clear = True

    repository = pp.Repository(pp.JsonFileStore(DATADIR))
    monitor = pp.PetPadMonitor(repository, sampler, decoder)

    if inputs:
        monitor.update_inputs(**inputs)

    if clear:
        answer = input('기록을 정말 삭제할까요? [y/N] ')
        if monitor.clear_history(answer.strip().lower() == 'y'):
            print('기록을 초기화했어요.')

    if INFILE:
        analyze(monitor, INFILE, OUTFILE, confirm, report)

    if show_calendar:
        render(print_calendar, monitor)
    if show_stats:
        render(print_stats, monitor)

    if EXPORT:
        if os.path.isdir(EXPORT):
            EXPORT = os.path.join(EXPORT, monitor.export_filename())
        with open(EXPORT, 'w', encoding='utf-8') as fp:
            fp.write(monitor.export_history())
        print(f'기록을 내보냈어요: {EXPORT}')


def analyze(monitor, infile, outfile, confirm, report):
    report['analysis_time'] = analysis_time = []

    with open(outfile, 'w', encoding='utf-8') as fp:
        files = pp.glob(infile)
        pbar = tqdm(files)

        fp.write('filename,error,R,G,B,H,S,V,level,ph\n')

        for filename in pbar:
            report['total'] += 1

            start_time = time.time()
            result = monitor.analyze(filename)
            analysis_time.append(time.time() - start_time)

            if result['success']:
                report['success'] += 1
                msg = 'PASS'

                color = result['color']
                h, s, v = result['hsv']
                ph = '' if result['ph'] is None else result['ph']
                fp.write(f'{filename},,{color["R"]},{color["G"]},{color["B"]},'
                         f'{h:.2f},{s:.2f},{v:.2f},{result["level"]},{ph}\n')

                # 확인하면 기록에 반영
                if confirm:
                    monitor.confirm_glucose()
                    monitor.confirm_ph()
            else:
                msg = 'FAIL'
                fp.write(f'{filename},{result["error"]},,,,,,,,\n')

            fn = filename
            if len(fn) > 40:
                fn = fn[-40:]
            pbar.set_description(f'{fn:<40}    {msg}')


if __name__ == "__main__":
    report = {
        'analysis_time': [],
        'total': 0,
        'success': 0
    }
    try:
        main(sys.argv, report)
    except KeyboardInterrupt:
        pass

    if report['total']:
        print(f"{report['success']}/{report['total']} analyzed")
